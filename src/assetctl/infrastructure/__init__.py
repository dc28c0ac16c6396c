"""Infrastructure layer — filesystem, compilers, templates, project context.

This layer depends on stdlib and third-party libs (libsass, rcssmin, rjsmin, Jinja2).
It must never import from services, commands, or output.
"""

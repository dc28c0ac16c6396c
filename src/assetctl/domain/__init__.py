"""Domain layer — pure path and text transforms with no I/O.

This layer must never import from infrastructure, services, commands, or output.
"""

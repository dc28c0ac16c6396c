"""Vendor prefixing for compiled CSS.

Works on the ``expanded`` output style, where libsass writes one
declaration per line and one selector block per brace. Prefixed copies are
inserted directly above the standard declaration with the same indent (no
cascade alignment). A prefix already declared earlier in the same block is
left alone.
"""

from __future__ import annotations

import re

# Property -> prefixes still required by the browsers the themes target.
PROPERTY_PREFIXES: dict[str, tuple[str, ...]] = {
    "appearance": ("-webkit-", "-moz-"),
    "backdrop-filter": ("-webkit-",),
    "backface-visibility": ("-webkit-",),
    "box-decoration-break": ("-webkit-",),
    "hyphens": ("-webkit-", "-ms-"),
    "mask": ("-webkit-",),
    "mask-image": ("-webkit-",),
    "mask-size": ("-webkit-",),
    "mask-position": ("-webkit-",),
    "mask-repeat": ("-webkit-",),
    "print-color-adjust": ("-webkit-",),
    "text-decoration-skip-ink": ("-webkit-",),
    "text-size-adjust": ("-webkit-", "-moz-"),
    "user-select": ("-webkit-", "-moz-", "-ms-"),
}

# (property, value) -> prefixed values.
VALUE_PREFIXES: dict[tuple[str, str], tuple[str, ...]] = {
    ("position", "sticky"): ("-webkit-sticky",),
}

# Property renamed rather than value-prefixed (``background-clip: text``).
_RENAMED: dict[tuple[str, str], str] = {
    ("background-clip", "text"): "-webkit-background-clip",
}

_DECL_RE = re.compile(r"^(?P<indent>\s*)(?P<prop>-?[a-zA-Z][\w-]*)\s*:\s*(?P<value>.+?)\s*;?\s*$")


def _declarations_to_add(prop: str, value: str, seen: set[str]) -> list[tuple[str, str]]:
    """Prefixed ``(property, value)`` pairs that *seen* does not already contain."""
    added: list[tuple[str, str]] = []
    for prefix in PROPERTY_PREFIXES.get(prop, ()):
        name = f"{prefix}{prop}"
        if name not in seen:
            added.append((name, value))

    key = (prop, value.lower())
    renamed = _RENAMED.get(key)
    if renamed is not None and renamed not in seen:
        added.append((renamed, value))
    for prefixed_value in VALUE_PREFIXES.get(key, ()):
        if f"{prop}:{prefixed_value}" not in seen:
            added.append((prop, prefixed_value))
    return added


def prefix_css(css: str) -> str:
    """Return *css* with vendor-prefixed declarations inserted."""
    out: list[str] = []
    # One set of declared names per open block; index 0 is the top level.
    blocks: list[set[str]] = [set()]

    for line in css.split("\n"):
        stripped = line.strip()

        if stripped.endswith("{"):
            blocks.append(set())
            out.append(line)
            continue
        if stripped.startswith("}"):
            if len(blocks) > 1:
                blocks.pop()
            out.append(line)
            continue

        match = _DECL_RE.match(line) if len(blocks) > 1 and not stripped.startswith("/*") else None
        if match is None:
            out.append(line)
            continue

        indent = match.group("indent")
        prop = match.group("prop").lower()
        value = match.group("value")
        seen = blocks[-1]

        for name, new_value in _declarations_to_add(prop, value, seen):
            out.append(f"{indent}{name}: {new_value};")
            seen.add(name if name != prop else f"{prop}:{new_value}")

        seen.add(prop)
        seen.add(f"{prop}:{value.lower()}")
        out.append(line)

    return "\n".join(out)

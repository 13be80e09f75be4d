"""
naming.py

Responsibility: Derive package names from directories and repository slugs from names.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

_NON_WORD = re.compile(r"\W+", re.ASCII)
_HYPHENS = re.compile(r"-+")


def derive_name(directory: str | Path, prefixes: Sequence[str] = ()) -> str:
    """
    Derive a package name from the last segment of `directory`.

    A segment like `acme-widget` with prefix `acme` becomes the scoped name `@acme/widget`.
    Anything else is used as-is.
    """
    segment = Path(directory).name
    alternatives = "|".join(re.escape(p) for p in prefixes if p)
    if alternatives:
        m = re.match(rf"^({alternatives})-(.+)$", segment, re.ASCII)
        if m:
            return f"@{m.group(1)}/{m.group(2)}"
    return segment


def repo_slug(name: str) -> str:
    """Sanitize a package name for use as a repository name: `My Cool! Tool` -> `My-Cool-Tool`."""
    slug = _NON_WORD.sub("-", name)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")

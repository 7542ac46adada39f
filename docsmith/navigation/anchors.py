"""Helpers for turning heading text into URL fragments.

Slugs are produced by python-markdown's ``toc`` slugifier so anchors match
the ids the ``toc`` extension assigns when the same Markdown is rendered to
HTML.

Examples
--------
>>> from docsmith.navigation.anchors import generate_anchor_id
>>> generate_anchor_id("API Reference & Examples")
'api-reference-examples'
>>> generate_anchor_id("   ")
''
"""

from __future__ import annotations

import re

from markdown.extensions.toc import slugify

from .models import AnchorLink

VALID_ANCHOR_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9_-]*")


def generate_anchor_id(text: str) -> str:
    """Return a lowercase, hyphen-separated fragment for ``text``."""
    return slugify(text.strip(), "-").strip("-")


def unique_anchor_id(text: str, used: set[str]) -> str:
    """Return an anchor for ``text`` not yet in ``used`` and record it.

    Collisions get numeric suffixes starting at ``-2``. Empty slugs fall back
    to ``"section"``.
    """
    base = generate_anchor_id(text) or "section"
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def create_anchor_link(text: str, level: int) -> AnchorLink:
    """Return the flat anchor link for a heading."""
    anchor = generate_anchor_id(text)
    return AnchorLink(id=f"anchor-{anchor}", text=text, href=f"#{anchor}", level=level)


def is_valid_anchor_id(anchor: str) -> bool:
    """Return True when ``anchor`` starts with a letter and is id-safe."""
    return VALID_ANCHOR_PATTERN.fullmatch(anchor) is not None


def sanitize_anchor_id(anchor: str) -> str:
    """Coerce ``anchor`` into a form accepted by :func:`is_valid_anchor_id`."""
    sanitized = re.sub(r"^[^a-zA-Z]+", "", anchor) or "heading"
    sanitized = re.sub(r"[^a-zA-Z0-9_-]", "-", sanitized)
    sanitized = re.sub(r"-+", "-", sanitized)
    return sanitized.rstrip("-")


__all__ = [
    "create_anchor_link",
    "generate_anchor_id",
    "is_valid_anchor_id",
    "sanitize_anchor_id",
    "unique_anchor_id",
]

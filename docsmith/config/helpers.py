"""Utility helpers shared by the docsmith configuration loader."""

from __future__ import annotations

import typing as typ

from docsmith.components.values import DECLARABLE_KINDS, PropKind
from docsmith.errors import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _positive_int(value: object, *, field: str) -> int:
    """Return ``value`` as a positive integer or raise SiteConfigError."""
    match value:
        case bool():
            pass
        case int() if value > 0:
            return value
        case str() if value.strip().isdigit() and int(value) > 0:
            return int(value)
    msg = f"'{field}' must be a positive integer, got {value!r}."
    raise SiteConfigError(msg)


def _parse_kind(value: object, *, component: str, prop: str) -> PropKind:
    """Return the declared kind of a prop, rejecting unknown type names."""
    try:
        kind = PropKind(str(value).strip().lower())
    except ValueError:
        kind = None
    if kind not in DECLARABLE_KINDS:
        allowed = ", ".join(sorted(DECLARABLE_KINDS))
        msg = (
            f"Prop '{prop}' of component '{component}' has unknown type "
            f"{value!r}; expected one of: {allowed}."
        )
        raise SiteConfigError(msg)
    return typ.cast("PropKind", kind)


def _normalize_choices(value: object, *, component: str, prop: str) -> tuple[str, ...]:
    """Normalize a ``choices`` entry into a tuple of strings."""
    match value:
        case None:
            return ()
        case list() | tuple():
            return tuple(str(choice) for choice in value)
        case _:
            msg = f"Choices for prop '{prop}' of component '{component}' must be a list."
            raise SiteConfigError(msg)


__all__ = ["_normalize_choices", "_optional_str", "_parse_kind", "_positive_int"]

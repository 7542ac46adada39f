"""Exception types and the per-occurrence error taxonomy.

Problems found while parsing or resolving a component are never raised; they
travel as messages on result objects and are tagged with an :class:`ErrorKind`
so callers can filter them. Exceptions are reserved for misuse of the API
(registering a component without a handler) and for broken configuration.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.StrEnum):
    """Classification attached to every error or warning message."""

    SYNTAX_WARNING = "syntax-warning"
    UNKNOWN_COMPONENT = "unknown-component"
    MISSING_REQUIRED_PROP = "missing-required-prop"
    TYPE_MISMATCH = "type-mismatch"
    CUSTOM_PROP_VALIDATION_FAILED = "custom-prop-validation-failed"
    CUSTOM_COMPONENT_VALIDATION_FAILED = "custom-component-validation-failed"
    RENDER_ERROR = "render-error"
    LINK_UNRESOLVED = "link-unresolved"


class DocsmithError(Exception):
    """Base exception for docsmith operations."""


class InvalidComponentError(DocsmithError, ValueError):
    """Raised when a component registration is missing a name or handler."""


class SiteConfigError(DocsmithError, ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class FrontmatterError(DocsmithError, ValueError):
    """Raised when a document's YAML header cannot be parsed."""


class DocumentNotFoundError(DocsmithError, FileNotFoundError):
    """Raised when a slug does not map to a Markdown file in the docs tree."""


__all__ = [
    "DocsmithError",
    "DocumentNotFoundError",
    "ErrorKind",
    "FrontmatterError",
    "InvalidComponentError",
    "SiteConfigError",
]

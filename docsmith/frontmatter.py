"""Split and validate the YAML front matter at the top of a document.

Front matter is a YAML mapping fenced by ``---`` lines at the very start of
the file. Validation reports the same :class:`ValidationResult` shape as the
component registry so callers can merge both kinds of findings.

Examples
--------
>>> from docsmith.frontmatter import split_frontmatter, validate_frontmatter
>>> meta, body = split_frontmatter("---\\ntitle: Intro\\n---\\n# Intro\\n")
>>> meta["title"], body
('Intro', '# Intro\\n')
>>> validate_frontmatter(meta).is_valid
True
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import io
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from docsmith.components.models import ValidationResult
from docsmith.errors import FrontmatterError

FRONTMATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
VISIBILITY_CHOICES = ("public", "private", "draft")


def _yaml_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def split_frontmatter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return ``(metadata, body)`` for ``text``.

    Documents without a leading ``---`` block yield an empty mapping and the
    text unchanged.

    Raises
    ------
    FrontmatterError
        If the block is not valid YAML or does not contain a mapping.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}, text
    try:
        loaded = _yaml_loader().load(io.StringIO(match.group(1)))
    except YAMLError as exc:
        msg = f"Invalid YAML front matter: {exc}"
        raise FrontmatterError(msg) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a YAML mapping."
        raise FrontmatterError(msg)
    return dict(loaded), text[match.end() :]


def _is_valid_date(value: object) -> bool:
    """Return True for date objects or ISO-8601 date/datetime strings."""
    match value:
        case dt.date():
            return True
        case str() as text:
            sanitized = text.strip()
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return False
            return True
        case _:
            return False


def validate_frontmatter(metadata: cabc.Mapping[str, typ.Any]) -> ValidationResult:
    """Check document metadata for required and well-formed fields.

    Parameters
    ----------
    metadata : Mapping[str, Any]
        Parsed front matter.

    Returns
    -------
    ValidationResult
        An error when ``title`` is missing or not a string; warnings for a
        non-string description or author, an unparsable date, malformed tags,
        and an unknown visibility.
    """
    result = ValidationResult()
    title = metadata.get("title")
    if not title or not isinstance(title, str):
        result.errors.append('Missing or invalid "title" field in frontmatter')

    description = metadata.get("description")
    if description and not isinstance(description, str):
        result.warnings.append("Description should be a string")

    author = metadata.get("author")
    if author and not isinstance(author, str):
        result.warnings.append("Author should be a string")

    date = metadata.get("date")
    if date and not _is_valid_date(date):
        result.warnings.append("Date should be in valid ISO format (YYYY-MM-DD)")

    tags = metadata.get("tags")
    if tags and not isinstance(tags, list):
        result.warnings.append("Tags should be an array of strings")
    elif tags and not all(isinstance(tag, str) for tag in tags):
        result.warnings.append("All tags should be strings")

    visibility = metadata.get("visibility")
    if visibility and visibility not in VISIBILITY_CHOICES:
        result.warnings.append(
            f"Visibility should be one of: {', '.join(VISIBILITY_CHOICES)}"
        )
    return result


__all__ = ["VISIBILITY_CHOICES", "split_frontmatter", "validate_frontmatter"]

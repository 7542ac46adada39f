r"""Find custom component syntax in Markdown and parse its props.

Two forms are recognised, both with a capitalised name
(``[A-Z][A-Za-z0-9]*``):

- self-closing: ``<Alert type="info" />``
- block: ``<Callout title="Note">Body text</Callout>``

Block matching is non-greedy and does not balance nested tags that share a
name: the first ``</Name>`` closes the block. ``ComponentParser(strict=True)``
switches to a depth-aware scanner for callers that need nesting.

Example
-------
>>> from docsmith.components.parser import ComponentParser
>>> parser = ComponentParser()
>>> [occ.name for occ in parser.parse_components('<Alert type="info" />\n<Card>x</Card>')]
['Alert', 'Card']
"""

from __future__ import annotations

import collections.abc as cabc
import functools
import logging
import re

from .models import ComponentDefinition, ComponentOccurrence, ValidationResult
from .scanner import (
    read_balanced_braces,
    read_bare_token,
    read_quoted_string,
    skip_whitespace,
)
from .values import PropertyBag, parse_literal

logger = logging.getLogger(__name__)

SELF_CLOSING_PATTERN = re.compile(r"<([A-Z][a-zA-Z0-9]*)\s*([^>]*?)\s*/>")
BLOCK_PATTERN = re.compile(r"<([A-Z][a-zA-Z0-9]*)\s*([^>]*?)>(.*?)</\1>", re.DOTALL)
OPEN_TAG_PATTERN = re.compile(r"<([A-Z][a-zA-Z0-9]*)\s*([^>]*?)>")
TAG_LIKE_PATTERN = re.compile(r"<[A-Z][a-zA-Z0-9]*[^>]*>")
COMPONENT_NAME_PATTERN = re.compile(r"[A-Z][a-zA-Z0-9]*")
PROP_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")

MALFORMED_WARNING = "Some component syntax may be malformed and was not parsed"

Replacer = cabc.Callable[[ComponentOccurrence], str]


class ComponentParser:
    """Parse component occurrences out of a text blob."""

    def __init__(self, *, strict: bool = False) -> None:
        """Create a parser.

        Parameters
        ----------
        strict : bool, optional
            When ``True`` block components are matched with a depth-aware
            scanner, so ``<Tabs><Tabs>a</Tabs></Tabs>`` is one outer block.
            Defaults to ``False`` (first closing tag wins).
        """
        self.strict = strict

    def parse_components(self, text: str) -> list[ComponentOccurrence]:
        """Return every component occurrence in ``text`` ordered by position."""
        occurrences = [
            ComponentOccurrence(
                full_text=match.group(0),
                name=match.group(1),
                props=self.parse_props(match.group(2)),
                children=None,
                start_index=match.start(),
                end_index=match.end(),
            )
            for match in SELF_CLOSING_PATTERN.finditer(text)
        ]
        if self.strict:
            occurrences.extend(self._balanced_blocks(text))
        else:
            occurrences.extend(
                ComponentOccurrence(
                    full_text=match.group(0),
                    name=match.group(1),
                    props=self.parse_props(match.group(2)),
                    children=match.group(3).strip(),
                    start_index=match.start(),
                    end_index=match.end(),
                )
                for match in BLOCK_PATTERN.finditer(text)
            )
        occurrences.sort(key=lambda occ: occ.start_index)
        return occurrences

    def parse_component_definition(self, text: str) -> ComponentDefinition | None:
        """Return the first occurrence in ``text`` as a definition, if any."""
        occurrences = self.parse_components(text)
        if not occurrences:
            return None
        return occurrences[0].to_definition()

    def replace_components(self, text: str, replacer: Replacer) -> str:
        """Replace each occurrence with ``replacer(occurrence)``.

        Occurrences are spliced from the last to the first so earlier offsets
        stay valid while the text changes length.
        """
        result = text
        for occurrence in reversed(self.parse_components(text)):
            replacement = replacer(occurrence)
            result = (
                result[: occurrence.start_index]
                + replacement
                + result[occurrence.end_index :]
            )
        return result

    def validate_syntax(self, text: str) -> ValidationResult:
        """Check ``text`` for tags that look like components but did not parse.

        Returns
        -------
        ValidationResult
            A warning when more tag-like substrings exist than parsed
            occurrences, and an error for any occurrence whose name is not a
            capitalised alphanumeric identifier.
        """
        result = ValidationResult()
        try:
            occurrences = self.parse_components(text)
            tag_like = TAG_LIKE_PATTERN.findall(text)
            if len(tag_like) > len(occurrences):
                result.warnings.append(MALFORMED_WARNING)
            for occurrence in occurrences:
                if not occurrence.name:
                    result.errors.append(
                        f"Component at position {occurrence.start_index} has no name"
                    )
                elif not COMPONENT_NAME_PATTERN.fullmatch(occurrence.name):
                    result.errors.append(
                        f'Component name "{occurrence.name}" must start with uppercase '
                        "letter and contain only alphanumeric characters"
                    )
        except Exception as exc:  # noqa: BLE001 - reported as data, never raised
            logger.exception("Unexpected failure while checking component syntax")
            result.errors.append(f"Syntax parsing error: {exc}")
        return result

    @staticmethod
    def parse_props(props_text: str) -> PropertyBag:
        """Convert a raw prop string into a property bag.

        ``name`` and ``name=`` become ``True``; ``name="..."`` is an unescaped
        string; ``name={...}`` goes through :func:`parse_literal`; any other
        value is taken verbatim up to the next whitespace. Characters that
        cannot start a prop name are skipped one at a time.
        """
        props: PropertyBag = {}
        length = len(props_text)
        index = 0
        while True:
            index = skip_whitespace(props_text, index)
            if index >= length:
                break
            name_match = PROP_NAME_PATTERN.match(props_text, index)
            if name_match is None:
                index += 1
                continue
            name = name_match.group(0)
            index = skip_whitespace(props_text, name_match.end())
            if index >= length or props_text[index] != "=":
                props[name] = True
                continue

            index = skip_whitespace(props_text, index + 1)
            if index >= length:
                props[name] = True
                break
            match props_text[index]:
                case '"':
                    scanned = read_quoted_string(props_text, index)
                    props[name] = scanned.value
                case "{":
                    scanned = read_balanced_braces(props_text, index)
                    props[name] = parse_literal(scanned.value)
                case _:
                    scanned = read_bare_token(props_text, index)
                    props[name] = scanned.value
            index = scanned.next_index
        return props

    def _balanced_blocks(self, text: str) -> list[ComponentOccurrence]:
        """Match block components while counting same-named nesting."""
        blocks: list[ComponentOccurrence] = []
        position = 0
        while True:
            opening = OPEN_TAG_PATTERN.search(text, position)
            if opening is None:
                break
            if opening.group(0).endswith("/>"):
                position = opening.end()
                continue
            name = opening.group(1)
            closing = _find_balanced_close(text, name, opening.end())
            if closing is None:
                position = opening.start() + 1
                continue
            close_start, close_end = closing
            blocks.append(
                ComponentOccurrence(
                    full_text=text[opening.start() : close_end],
                    name=name,
                    props=self.parse_props(opening.group(2)),
                    children=text[opening.end() : close_start].strip(),
                    start_index=opening.start(),
                    end_index=close_end,
                )
            )
            position = close_end
        return blocks


@functools.lru_cache(maxsize=128)
def _tag_pattern(name: str) -> re.Pattern[str]:
    """Return a pattern matching opening and closing ``name`` tags."""
    return re.compile(rf"<(/?){re.escape(name)}(?![A-Za-z0-9])[^>]*>")


def _find_balanced_close(text: str, name: str, start: int) -> tuple[int, int] | None:
    """Return the span of the ``</name>`` that balances an opening tag."""
    depth = 1
    for tag in _tag_pattern(name).finditer(text, start):
        if tag.group(1):
            depth -= 1
            if depth == 0:
                return tag.start(), tag.end()
        elif not tag.group(0).endswith("/>"):
            depth += 1
    return None


__all__ = [
    "BLOCK_PATTERN",
    "MALFORMED_WARNING",
    "SELF_CLOSING_PATTERN",
    "ComponentParser",
    "Replacer",
]

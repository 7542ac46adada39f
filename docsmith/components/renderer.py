"""Render component syntax inside Markdown into placeholders or error notices.

:class:`ComponentRenderer` runs the parser and the registry over a whole
document. Valid components are replaced with ``__COMPONENT_<index>_<Name>__``
tokens that a presentation layer later swaps for real output; invalid ones
are replaced with a block-quoted error notice so problems stay visible in the
rendered page. One broken component never stops the rest of the document from
rendering.

Example
-------
>>> from docsmith.components.builtins import create_default_registry
>>> from docsmith.components.renderer import ComponentRenderer
>>> renderer = ComponentRenderer(create_default_registry())
>>> renderer.render('<Alert type="warning" />').content
'__COMPONENT_0_Alert__'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import typing as typ

from docsmith._constants import (
    ERROR_HEADING_TEMPLATE,
    PLACEHOLDER_PATTERN,
    PLACEHOLDER_TEMPLATE,
)

from .models import ComponentDefinition, ComponentOccurrence, ValidationResult
from .parser import ComponentParser

if typ.TYPE_CHECKING:
    from .registry import ComponentRegistry
    from .values import PropertyBag

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(PLACEHOLDER_PATTERN)


@dc.dataclass(slots=True)
class RenderedComponentInfo:
    """Manifest entry for one occurrence, valid or not.

    Attributes
    ----------
    name : str
        Component name.
    props : PropertyBag
        Props as parsed from the source, or the resolved bag when the
        component rendered successfully.
    children : str or None
        Inner text of block components.
    is_valid : bool
        Whether the occurrence was replaced by a placeholder.
    errors : list[str]
        Problems reported for this occurrence.
    position : tuple[int, int]
        ``(start, end)`` offsets in the original document.
    placeholder : str or None
        Token spliced into the processed text for valid components.
    output : object
        Value returned by the component handler.
    """

    name: str
    props: PropertyBag
    children: str | None
    is_valid: bool
    errors: list[str]
    position: tuple[int, int]
    placeholder: str | None = None
    output: typ.Any = None


@dc.dataclass(slots=True)
class RenderResult:
    """Processed document plus the manifest of components found in it."""

    content: str
    components: list[RenderedComponentInfo] = dc.field(default_factory=list)
    errors: list[str] = dc.field(default_factory=list)
    warnings: list[str] = dc.field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Return True when rendering produced no errors."""
        return not self.errors


class ComponentRenderer:
    """Substitute component syntax using a registry and a parser."""

    def __init__(
        self, registry: ComponentRegistry, parser: ComponentParser | None = None
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        registry : ComponentRegistry
            Registry consulted (read-only) for every occurrence.
        parser : ComponentParser, optional
            Parser used to locate occurrences; a default non-strict parser is
            created when omitted.
        """
        self.registry = registry
        self.parser = parser or ComponentParser()

    def render(self, text: str) -> RenderResult:
        """Replace every component occurrence in ``text``.

        Returns
        -------
        RenderResult
            ``content`` holds the processed text. When the syntax check
            reports errors the original text is returned untouched alongside
            those errors. ``components`` lists every occurrence in document
            order regardless of the order they were processed in.
        """
        syntax = self.parser.validate_syntax(text)
        result = RenderResult(
            content=text, errors=list(syntax.errors), warnings=list(syntax.warnings)
        )
        if not syntax.is_valid:
            return result

        occurrences = self.parser.parse_components(text)
        infos: list[RenderedComponentInfo] = []
        content = text
        for index in range(len(occurrences) - 1, -1, -1):
            occurrence = occurrences[index]
            info, replacement = self._render_occurrence(index, occurrence)
            result.errors.extend(info.errors)
            content = _splice(
                content, occurrence.start_index, occurrence.end_index, replacement
            )
            infos.append(info)
        infos.reverse()

        result.content = content
        result.components = infos
        logger.debug(
            "Rendered %d components with %d errors",
            len(infos),
            len(result.errors),
        )
        return result

    def extract_definitions(self, text: str) -> list[ComponentDefinition]:
        """Return the definition of every occurrence in ``text``."""
        return [occ.to_definition() for occ in self.parser.parse_components(text)]

    def validate_components(self, text: str) -> ValidationResult:
        """Dry-run the syntax and registry checks for every occurrence."""
        result = self.parser.validate_syntax(text)
        for definition in self.extract_definitions(text):
            result.extend(self.registry.validate_definition(definition))
        return result

    def _render_occurrence(
        self, index: int, occurrence: ComponentOccurrence
    ) -> tuple[RenderedComponentInfo, str]:
        """Return the manifest entry and replacement text for one occurrence."""
        info = RenderedComponentInfo(
            name=occurrence.name,
            props=dict(occurrence.props),
            children=occurrence.children,
            is_valid=False,
            errors=[],
            position=(occurrence.start_index, occurrence.end_index),
        )
        try:
            validation = self.registry.validate_definition(occurrence.to_definition())
            if not validation.is_valid:
                info.errors = list(validation.errors)
                return info, format_error_notice(occurrence.name, info.errors)

            resolved = self.registry.resolve(occurrence.name, occurrence.props)
            if not resolved.is_valid:
                info.errors = list(resolved.errors)
                return info, format_error_notice(occurrence.name, info.errors)
        except Exception as exc:  # noqa: BLE001 - isolate one component's failure
            logger.exception("Unexpected failure rendering %s", occurrence.name)
            info.errors = [f'Failed to render component "{occurrence.name}": {exc}']
            return info, format_error_notice(occurrence.name, info.errors)

        placeholder = PLACEHOLDER_TEMPLATE.format(index=index, name=occurrence.name)
        info.is_valid = True
        info.props = resolved.props
        info.output = resolved.output
        info.placeholder = placeholder
        return info, placeholder


def format_error_notice(name: str, errors: cabc.Sequence[str]) -> str:
    """Return the block-quoted notice that replaces a failed component.

    Examples
    --------
    >>> print(format_error_notice("Card", ["boom"]))  # doctest: +NORMALIZE_WHITESPACE
    <BLANKLINE>
    > **Component Error: Card**
    >
    > - boom
    <BLANKLINE>
    """
    lines = [f"> - {error}" for error in errors]
    body = "\n".join(lines)
    return f"\n> {ERROR_HEADING_TEMPLATE.format(name=name)}\n>\n{body}\n"


def substitute_placeholders(
    content: str,
    components: cabc.Sequence[RenderedComponentInfo],
    render_fn: cabc.Callable[[RenderedComponentInfo], str],
) -> str:
    """Replace placeholder tokens in ``content`` with ``render_fn(info)``.

    Tokens whose index does not refer to a valid component with the same name
    are left in place.
    """

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(components):
            return match.group(0)
        info = components[index]
        if not info.is_valid or info.name != match.group(2):
            return match.group(0)
        return render_fn(info)

    return PLACEHOLDER_RE.sub(_replace, content)


def _splice(text: str, start: int, end: int, replacement: str) -> str:
    return text[:start] + replacement + text[end:]


__all__ = [
    "ComponentRenderer",
    "RenderResult",
    "RenderedComponentInfo",
    "format_error_notice",
    "substitute_placeholders",
]

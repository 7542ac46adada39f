"""Shared dataclasses used by the component parsing and rendering pipeline."""

from __future__ import annotations

import dataclasses as dc

from .values import PropertyBag  # noqa: TC001 - used in dataclass annotations


@dc.dataclass(frozen=True, slots=True)
class ComponentOccurrence:
    """One textual match of the component syntax.

    Attributes
    ----------
    full_text : str
        The exact source text that matched, tags included.
    name : str
        Component name, for example ``"Alert"``.
    props : PropertyBag
        Parsed property values keyed by prop name.
    children : str or None
        Stripped inner text for block components; ``None`` when self-closing.
    start_index : int
        Offset of the opening ``<`` in the scanned text.
    end_index : int
        Offset immediately after the match.
    """

    full_text: str
    name: str
    props: PropertyBag
    children: str | None
    start_index: int
    end_index: int

    def to_definition(self) -> ComponentDefinition:
        """Return the name/props/children view used for registry checks."""
        return ComponentDefinition(
            name=self.name, props=dict(self.props), children=self.children
        )


@dc.dataclass(slots=True)
class ComponentDefinition:
    """Canonical ``{name, props, children}`` description of a component."""

    name: str
    props: PropertyBag = dc.field(default_factory=dict)
    children: str | None = None


@dc.dataclass(slots=True)
class ValidationResult:
    """Outcome of a dry validation pass.

    ``is_valid`` is derived from ``errors`` so the two can never disagree.
    Warnings never affect validity.
    """

    errors: list[str] = dc.field(default_factory=list)
    warnings: list[str] = dc.field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Return True when no errors were recorded."""
        return not self.errors

    def extend(self, other: ValidationResult) -> None:
        """Append the errors and warnings of ``other`` to this result."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


__all__ = ["ComponentDefinition", "ComponentOccurrence", "ValidationResult"]

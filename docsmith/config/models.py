"""Typed dataclasses describing docsmith site configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from docsmith._constants import ROOT_PATH, ROOT_TITLE, WORDS_PER_MINUTE
from docsmith.components.registry import PropSpec
from docsmith.components.values import PropKind
from docsmith.errors import SiteConfigError


@dc.dataclass(slots=True)
class PropConfig:
    """A prop declared for a configured component."""

    kind: PropKind = PropKind.STRING
    required: bool = False
    default: typ.Any = None
    has_default: bool = False
    choices: tuple[str, ...] = ()

    def to_spec(self) -> PropSpec:
        """Return the registry declaration for this prop."""
        validator = None
        if self.choices:
            allowed = frozenset(self.choices)

            def validator(value: object) -> bool:
                return value in allowed

        if self.has_default:
            return PropSpec(
                self.kind,
                required=self.required,
                default=self.default,
                validator=validator,
            )
        return PropSpec(self.kind, required=self.required, validator=validator)


@dc.dataclass(slots=True)
class ComponentConfig:
    """A component declared in the site configuration."""

    name: str
    props: dict[str, PropConfig] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class SiteConfig:
    """Shared defaults plus the components declared by the site."""

    docs_dir: str = "docs"
    root_path: str = ROOT_PATH
    root_title: str = ROOT_TITLE
    words_per_minute: int = WORDS_PER_MINUTE
    strict_components: bool = False
    components: dict[str, ComponentConfig] = dc.field(default_factory=dict)

    def get_component(self, name: str) -> ComponentConfig:
        """Return the configured component called ``name``."""
        try:
            return self.components[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.components)) or "none"
            msg = f"Unknown component '{name}'. Configured components: {available}"
            raise KeyError(msg) from exc


__all__ = ["ComponentConfig", "PropConfig", "SiteConfig", "SiteConfigError"]

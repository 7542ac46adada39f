"""Component syntax engine: scanning, parsing, schema resolution, rendering."""

from .builtins import create_default_registry, register_builtins
from .models import ComponentDefinition, ComponentOccurrence, ValidationResult
from .parser import ComponentParser
from .registry import ComponentRegistry, ComponentSchema, PropSpec, ResolutionResult
from .renderer import (
    ComponentRenderer,
    RenderedComponentInfo,
    RenderResult,
    substitute_placeholders,
)
from .values import UNDEFINED, PropKind, parse_literal

__all__ = [
    "UNDEFINED",
    "ComponentDefinition",
    "ComponentOccurrence",
    "ComponentParser",
    "ComponentRegistry",
    "ComponentRenderer",
    "ComponentSchema",
    "PropKind",
    "PropSpec",
    "RenderResult",
    "RenderedComponentInfo",
    "ResolutionResult",
    "ValidationResult",
    "create_default_registry",
    "parse_literal",
    "register_builtins",
    "substitute_placeholders",
]

"""Built-in components shipped with docsmith.

The handlers here return a short Markdown fallback describing the component
chrome (heading line, link, caption). A presentation layer that owns real
component instantiation is free to ignore it and use the resolved props.
"""

from __future__ import annotations

from .registry import ComponentRegistry, ComponentSchema, PropSpec, PropValidator
from .values import PropertyBag, PropKind

ALERT_TYPES = ("info", "warning", "error", "success")


def one_of(*choices: str) -> PropValidator:
    """Return a validator accepting only the given string choices."""
    allowed = frozenset(choices)

    def _validate(value: object) -> bool:
        return value in allowed

    return _validate


def _alert(props: PropertyBag) -> str:
    label = str(props["type"]).capitalize()
    title = props.get("title")
    heading = f"{label}: {title}" if title else label
    return f"> **{heading}**"


def _callout(props: PropertyBag) -> str:
    title = props.get("title") or str(props["type"]).capitalize()
    return f"> **{title}**"


def _card(props: PropertyBag) -> str:
    title = props["title"]
    line = f"[{title}]({props['href']})" if props.get("href") else f"**{title}**"
    description = props.get("description")
    return f"{line}\n\n{description}" if description else line


def _code_block(props: PropertyBag) -> str:
    title = props.get("title")
    return f"*{title}* ({props['language']})" if title else f"({props['language']})"


BUILTIN_SCHEMAS: dict[str, ComponentSchema] = {
    "Alert": ComponentSchema(
        handler=_alert,
        props={
            "type": PropSpec(
                PropKind.STRING, default="info", validator=one_of(*ALERT_TYPES)
            ),
            "title": PropSpec(PropKind.STRING),
        },
    ),
    "Callout": ComponentSchema(
        handler=_callout,
        props={
            "type": PropSpec(
                PropKind.STRING, default="info", validator=one_of(*ALERT_TYPES)
            ),
            "title": PropSpec(PropKind.STRING),
            "icon": PropSpec(PropKind.BOOLEAN, default=True),
            "className": PropSpec(PropKind.STRING, default=""),
        },
    ),
    "Card": ComponentSchema(
        handler=_card,
        props={
            "title": PropSpec(PropKind.STRING, required=True),
            "description": PropSpec(PropKind.STRING),
            "href": PropSpec(PropKind.STRING),
        },
    ),
    "CodeBlock": ComponentSchema(
        handler=_code_block,
        props={
            "language": PropSpec(PropKind.STRING, default="text"),
            "title": PropSpec(PropKind.STRING),
            "showLineNumbers": PropSpec(PropKind.BOOLEAN, default=False),
        },
    ),
}


def register_builtins(registry: ComponentRegistry) -> ComponentRegistry:
    """Register every built-in component on ``registry`` and return it."""
    for name, schema in BUILTIN_SCHEMAS.items():
        registry.register(name, schema)
    return registry


def create_default_registry() -> ComponentRegistry:
    """Return a new registry preloaded with the built-in components."""
    return register_builtins(ComponentRegistry())


__all__ = [
    "ALERT_TYPES",
    "BUILTIN_SCHEMAS",
    "create_default_registry",
    "one_of",
    "register_builtins",
]

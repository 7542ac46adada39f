"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ

from ruamel.yaml import YAML

from docsmith.components.parser import COMPONENT_NAME_PATTERN
from docsmith.components.registry import ComponentSchema
from docsmith.errors import SiteConfigError

from .helpers import _normalize_choices, _optional_str, _parse_kind, _positive_int
from .models import ComponentConfig, PropConfig, SiteConfig

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docsmith.components.registry import ComponentRegistry
    from docsmith.components.values import PropertyBag

logger = logging.getLogger(__name__)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing docs defaults and components.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docsmith.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration. A missing file yields ``SiteConfig()``.

    Raises
    ------
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a component name is not capitalised, a prop declares an unknown
        type, or ``words_per_minute`` is not a positive integer.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docsmith.config import load_site_config
    >>> config = load_site_config(Path("docsmith.yaml"))  # doctest: +SKIP
    >>> sorted(config.components)  # doctest: +SKIP
    ['Badge']
    """
    if not path.exists():
        logger.debug("No configuration at %s; using defaults", path)
        return SiteConfig()

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    base = SiteConfig()

    components: dict[str, ComponentConfig] = {}
    for name, payload in (raw.get("components") or {}).items():
        components[name] = _build_component_config(str(name), payload or {})

    return SiteConfig(
        docs_dir=_optional_str(defaults.get("docs_dir")) or base.docs_dir,
        root_path=_optional_str(defaults.get("root_path")) or base.root_path,
        root_title=_optional_str(defaults.get("root_title")) or base.root_title,
        words_per_minute=_positive_int(
            defaults.get("words_per_minute", base.words_per_minute),
            field="words_per_minute",
        ),
        strict_components=bool(
            defaults.get("strict_components", base.strict_components)
        ),
        components=components,
    )


def _build_component_config(name: str, payload: object) -> ComponentConfig:
    """Build a ComponentConfig for a single ``components`` entry."""
    if not COMPONENT_NAME_PATTERN.fullmatch(name):
        msg = f"Component name '{name}' must start with an uppercase letter."
        raise SiteConfigError(msg)
    if not isinstance(payload, dict):
        msg = f"Component '{name}' must be a mapping."
        raise SiteConfigError(msg)
    props: dict[str, PropConfig] = {}
    for prop_name, prop_payload in (payload.get("props") or {}).items():
        match prop_payload:
            case dict():
                props[str(prop_name)] = _build_prop_config(
                    name, str(prop_name), prop_payload
                )
            case str():
                props[str(prop_name)] = PropConfig(
                    kind=_parse_kind(prop_payload, component=name, prop=str(prop_name))
                )
            case _:
                msg = f"Prop '{prop_name}' of component '{name}' must be a mapping."
                raise SiteConfigError(msg)
    return ComponentConfig(name=name, props=props)


def _build_prop_config(
    component: str, prop: str, payload: typ.Mapping[str, typ.Any]
) -> PropConfig:
    """Build a PropConfig from a prop mapping."""
    return PropConfig(
        kind=_parse_kind(payload.get("type", "string"), component=component, prop=prop),
        required=bool(payload.get("required", False)),
        default=payload.get("default"),
        has_default="default" in payload,
        choices=_normalize_choices(
            payload.get("choices"), component=component, prop=prop
        ),
    )


def _passthrough(props: PropertyBag) -> PropertyBag:
    """Return the resolved props unchanged."""
    return dict(props)


def register_configured_components(
    registry: ComponentRegistry, config: SiteConfig
) -> list[str]:
    """Register every component declared in ``config`` on ``registry``.

    Each component gets a pass-through handler returning its resolved props.
    Declarations replace existing registrations of the same name.

    Returns
    -------
    list[str]
        Names registered, in configuration order.
    """
    for component in config.components.values():
        registry.register(
            component.name,
            ComponentSchema(
                handler=_passthrough,
                props={
                    prop_name: prop.to_spec()
                    for prop_name, prop in component.props.items()
                },
            ),
        )
    return list(config.components)


__all__ = ["load_site_config", "register_configured_components"]

"""Load and validate docsmith configuration YAML.

This subpackage parses the project's ``docsmith.yaml`` file into typed
dataclasses (:class:`SiteConfig`, :class:`ComponentConfig`,
:class:`PropConfig`). Shared defaults control where documents live and how
navigation is rooted; the ``components`` section declares extra components
whose props are checked like the built-ins.

Examples
--------
>>> from pathlib import Path
>>> from docsmith.components import create_default_registry
>>> from docsmith.config import load_site_config, register_configured_components
>>> site = load_site_config(Path("docsmith.yaml"))  # doctest: +SKIP
>>> registry = create_default_registry()  # doctest: +SKIP
>>> register_configured_components(registry, site)  # doctest: +SKIP
['Badge']
"""

from .loader import load_site_config, register_configured_components
from .models import ComponentConfig, PropConfig, SiteConfig, SiteConfigError

__all__ = [
    "ComponentConfig",
    "PropConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
    "register_configured_components",
]

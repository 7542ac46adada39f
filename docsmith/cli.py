"""Cyclopts CLI entrypoint for rendering and checking docsmith documentation.

The ``docsmith`` console script defined here expands custom components in a
single Markdown file, validates a whole docs directory before deploy, prints
the navigation state for a route as JSON, and lists the registered
components. Every option can also be supplied through a ``DOCSMITH_``
environment variable.

Examples
--------
Validate the default docs directory:

>>> from docsmith.cli import main
>>> main()  # doctest: +SKIP

Print the navigation state for a page:

>>> from docsmith.cli import app
>>> app.run(["nav", "--path", "/docs/guide/setup"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec
from cyclopts import App, Parameter

from .components import ComponentParser, ComponentRenderer, create_default_registry
from .components.renderer import substitute_placeholders
from .config import load_site_config, register_configured_components
from .docs_tree import DocsTree
from .frontmatter import split_frontmatter
from .navigation.builder import create_navigation_state

if typ.TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from .components.renderer import RenderedComponentInfo
    from .config import SiteConfig

DEFAULT_CONFIG = Path("docsmith.yaml")

app = App(name="docsmith", config=cyclopts.config.Env("DOCSMITH_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="DOCSMITH_CONFIG")
]
DocsDirOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the docs directory", env_var="DOCSMITH_DOCS_DIR"),
]
VerboseOption = typ.Annotated[
    bool, Parameter(help="Log debug messages", env_var="DOCSMITH_VERBOSE")
]


def _configure_logging(verbose: bool) -> None:
    """Route library log records to stderr at the requested level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_renderer(site_config: SiteConfig) -> ComponentRenderer:
    """Return a renderer over the built-in and configured components."""
    registry = create_default_registry()
    register_configured_components(registry, site_config)
    return ComponentRenderer(
        registry, ComponentParser(strict=site_config.strict_components)
    )


def _build_tree(site_config: SiteConfig, docs_dir: Path | None) -> DocsTree:
    return DocsTree(
        docs_dir or Path(site_config.docs_dir),
        site_config.root_path,
        words_per_minute=site_config.words_per_minute,
    )


def _expanded_output(info: RenderedComponentInfo) -> str:
    """Return the handler output of a rendered component as text."""
    return info.output if isinstance(info.output, str) else ""


@app.command(help="Expand custom components in a Markdown file.")
def render(
    file: Path,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    expand: typ.Annotated[
        bool,
        Parameter(
            help="Replace placeholders with each component's fallback Markdown",
            env_var="DOCSMITH_EXPAND",
        ),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Render the components of a single document and print the result.

    Parameters
    ----------
    file : Path
        Markdown file to process; front matter is stripped before rendering.
    config : Path, optional
        Path to the ``docsmith.yaml`` configuration file (overridable via
        ``DOCSMITH_CONFIG``).
    expand : bool, optional
        Substitute the fallback Markdown of every valid component for its
        placeholder token.
    verbose : bool, optional
        Emit debug logging on stderr.

    Raises
    ------
    SystemExit
        With status 1 when any component failed to render.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    renderer = _build_renderer(site_config)
    _, body = split_frontmatter(file.read_text(encoding="utf-8"))
    result = renderer.render(body)
    content = result.content
    if expand:
        content = substitute_placeholders(content, result.components, _expanded_output)
    print(content)
    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    for error in result.errors:
        print(f"error: {error}", file=sys.stderr)
    if not result.is_valid:
        raise SystemExit(1)


@app.command(help="Validate every document in the docs directory.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Report front matter, link, and component problems for the docs tree.

    Raises
    ------
    SystemExit
        With status 1 when any error-level issue was found.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    tree = _build_tree(site_config, docs_dir)
    issues = tree.validate(_build_renderer(site_config))
    for issue in issues:
        print(f"{issue.file}: {issue.kind}: {issue.message}")
    errors = sum(1 for issue in issues if issue.kind == "error")
    warnings = len(issues) - errors
    checked = len(tree.slugs())
    print(f"checked {checked} documents: {errors} errors, {warnings} warnings")
    if errors:
        raise SystemExit(1)


@app.command(help="Print the navigation state for a route as JSON.")
def nav(
    *,
    path: typ.Annotated[
        str, Parameter(help="Route of the current page", env_var="DOCSMITH_PATH")
    ] = "/docs",
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Build the table of contents, link graph, and breadcrumbs for ``path``."""
    _configure_logging(verbose)
    site_config = load_site_config(config)
    tree = _build_tree(site_config, docs_dir)
    state = create_navigation_state(
        path,
        tree.documents(),
        tree.routes(),
        root_path=site_config.root_path,
        root_title=site_config.root_title,
    )
    print(msgspec.json.format(msgspec.json.encode(state), indent=2).decode())


@app.command(help="Print the sidebar tree of the docs directory as JSON.")
def sidebar(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = None,
) -> None:
    """Print the sidebar entries discovered under the docs directory."""
    site_config = load_site_config(config)
    tree = _build_tree(site_config, docs_dir)
    print(msgspec.json.format(msgspec.json.encode(tree.sidebar()), indent=2).decode())


@app.command(help="List the registered component names.")
def components(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Print one registered component name per line."""
    site_config = load_site_config(config)
    for name in _build_renderer(site_config).registry.list_names():
        print(name)


def main() -> None:
    """Invoke the Cyclopts application that powers the `docsmith` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

"""Discover, load, and validate the Markdown documents under a docs directory.

:class:`DocsTree` maps every ``.md``/``.mdx`` file below a root directory to a
slug (its relative path without suffix) and a route under the configured
prefix (``/docs/<slug>``, with ``index`` files standing for their folder).
Documents are parsed on demand into
:class:`~docsmith.navigation.models.ParsedDocument` instances.

>>> from pathlib import Path
>>> from docsmith.docs_tree import DocsTree
>>> tree = DocsTree(Path("docs"))  # doctest: +SKIP
>>> tree.routes()  # doctest: +SKIP
['/docs', '/docs/guide/setup']
>>> [issue.message for issue in tree.validate()]  # doctest: +SKIP
['Possible broken link: /docs/missing']

Validation reports missing titles, malformed front matter, and internal links
that do not match any discovered route. Links to ``/images`` assets, external
URLs, and in-page anchors are never checked.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import posixpath
import typing as typ

from ._constants import MARKDOWN_SUFFIXES, ROOT_PATH, WORDS_PER_MINUTE
from .errors import DocumentNotFoundError, FrontmatterError
from .frontmatter import split_frontmatter, validate_frontmatter
from .markdown_parser import parse_document
from .navigation.builder import format_breadcrumb_title
from .navigation.models import LinkKind

if typ.TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from pathlib import Path

    from .components.renderer import ComponentRenderer
    from .navigation.models import ParsedDocument

logger = logging.getLogger(__name__)

ASSET_PREFIX = "/images"


@dc.dataclass(frozen=True, slots=True)
class DocIssue:
    """A problem found while validating one document."""

    file: str
    kind: str
    message: str


@dc.dataclass(slots=True)
class SidebarItem:
    """Entry in the sidebar tree; folders carry children, files a route."""

    title: str
    route: str | None = None
    children: list[SidebarItem] = dc.field(default_factory=list)


class DocsTree:
    """Index of the Markdown documents below ``root``."""

    def __init__(
        self,
        root: Path,
        route_prefix: str = ROOT_PATH,
        *,
        words_per_minute: int = WORDS_PER_MINUTE,
    ) -> None:
        """Initialize the tree.

        Parameters
        ----------
        root : Path
            Directory containing the documentation sources.
        route_prefix : str, optional
            Route under which documents are served; defaults to ``/docs``.
        words_per_minute : int, optional
            Reading speed used for section read-time estimates.
        """
        self.root = root
        self.route_prefix = route_prefix.rstrip("/") or "/"
        self.words_per_minute = words_per_minute

    def files(self) -> list[Path]:
        """Return every Markdown file below the root, sorted by path."""
        if not self.root.is_dir():
            return []
        return sorted(
            path
            for path in self.root.rglob("*")
            if path.is_file() and path.suffix in MARKDOWN_SUFFIXES
        )

    def slugs(self) -> list[str]:
        """Return the slug of every document, in path order."""
        return [self._slug_for(path) for path in self.files()]

    def route_for(self, slug: str) -> str:
        """Return the route serving ``slug``."""
        stem = slug.strip("/")
        if stem == "index":
            stem = ""
        elif stem.endswith("/index"):
            stem = stem[: -len("/index")]
        return f"{self.route_prefix.rstrip('/')}/{stem}" if stem else self.route_prefix

    def routes(self) -> list[str]:
        """Return the route of every document without duplicates."""
        return list(dict.fromkeys(self.route_for(slug) for slug in self.slugs()))

    def find_file(self, slug: str) -> Path:
        """Return the source file for ``slug``.

        Raises
        ------
        DocumentNotFoundError
            If neither ``<slug>.md`` nor ``<slug>.mdx`` exists.
        """
        stem = slug.strip("/") or "index"
        for suffix in MARKDOWN_SUFFIXES:
            candidate = self.root / f"{stem}{suffix}"
            if candidate.is_file():
                return candidate
        msg = f"Doc not found for slug: {stem}"
        raise DocumentNotFoundError(msg)

    def load(self, slug: str) -> ParsedDocument:
        """Parse the document for ``slug``.

        The document id is its route, the same key internal links resolve
        to, so a page's outgoing and incoming links share one link-graph
        entry. Relative links resolve against the route of its folder.
        """
        path = self.find_file(slug)
        stem = slug.strip("/") or "index"
        return parse_document(
            path.read_text(encoding="utf-8"),
            self.route_for(stem),
            words_per_minute=self.words_per_minute,
            base_path=self._base_path(stem),
        )

    def documents(self) -> list[ParsedDocument]:
        """Parse and return every readable document, in path order.

        Documents whose front matter cannot be parsed are logged and skipped;
        :meth:`validate` reports them.
        """
        documents: list[ParsedDocument] = []
        for slug in self.slugs():
            try:
                documents.append(self.load(slug))
            except FrontmatterError as exc:
                logger.warning("Skipping %s: %s", slug, exc)
        return documents

    def sidebar(self) -> list[SidebarItem]:
        """Return the sidebar tree for the docs directory.

        Files are titled from their front matter, falling back to the file
        name. The root ``index`` document sorts first; everything else is
        ordered by title.
        """
        if not self.root.is_dir():
            return []
        return self._sidebar_items(self.root)

    def validate(self, renderer: ComponentRenderer | None = None) -> list[DocIssue]:
        """Check every document and return the problems found.

        Parameters
        ----------
        renderer : ComponentRenderer, optional
            When given, component syntax and props in each document are
            validated as well.

        Returns
        -------
        list[DocIssue]
            Errors for unreadable front matter, missing titles, and invalid
            components; warnings for front matter style problems and internal
            links that match no known route.
        """
        issues: list[DocIssue] = []
        slugs = self.slugs()
        known = {self.route_prefix, *(self.route_for(slug) for slug in slugs)}
        for slug in slugs:
            text = self.find_file(slug).read_text(encoding="utf-8")
            try:
                metadata, body = split_frontmatter(text)
            except FrontmatterError as exc:
                issues.append(DocIssue(slug, "error", str(exc)))
                continue
            frontmatter = validate_frontmatter(metadata)
            issues.extend(DocIssue(slug, "error", m) for m in frontmatter.errors)
            issues.extend(DocIssue(slug, "warning", m) for m in frontmatter.warnings)
            issues.extend(self._link_issues(slug, known))
            if renderer is not None:
                components = renderer.validate_components(body)
                issues.extend(DocIssue(slug, "error", m) for m in components.errors)
                issues.extend(
                    DocIssue(slug, "warning", m) for m in components.warnings
                )
        logger.debug("Validated %d documents under %s", len(slugs), self.root)
        return issues

    def _link_issues(self, slug: str, known: set[str]) -> list[DocIssue]:
        issues: list[DocIssue] = []
        for reference in self.load(slug).references:
            if reference.kind is not LinkKind.INTERNAL:
                continue
            target = reference.target
            if target.startswith(ASSET_PREFIX):
                continue
            if target.startswith(self.route_prefix) and target not in known:
                issues.append(
                    DocIssue(slug, "warning", f"Possible broken link: {target}")
                )
        return issues

    def _slug_for(self, path: Path) -> str:
        return path.relative_to(self.root).with_suffix("").as_posix()

    def _base_path(self, slug: str) -> str:
        folder = posixpath.dirname(slug)
        prefix = self.route_prefix.rstrip("/")
        return f"{prefix}/{folder}" if folder else (prefix or "/")

    def _file_title(self, path: Path) -> str:
        """Return the front matter title of ``path``, or one from its name."""
        try:
            metadata, _ = split_frontmatter(path.read_text(encoding="utf-8"))
        except FrontmatterError as exc:
            logger.warning("Using file name as title for %s: %s", path, exc)
            metadata = {}
        return str(metadata.get("title") or format_breadcrumb_title(path.stem))

    def _sidebar_items(self, directory: Path) -> list[SidebarItem]:
        items: list[SidebarItem] = []
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                children = self._sidebar_items(entry)
                if children:
                    items.append(
                        SidebarItem(
                            title=format_breadcrumb_title(entry.name),
                            children=children,
                        )
                    )
            elif entry.is_file() and entry.suffix in MARKDOWN_SUFFIXES:
                items.append(
                    SidebarItem(
                        title=self._file_title(entry),
                        route=self.route_for(self._slug_for(entry)),
                    )
                )
        return sorted(
            items,
            key=lambda item: (item.route != self.route_prefix, item.title.casefold()),
        )


__all__ = ["DocIssue", "DocsTree", "SidebarItem"]

"""Build tables of contents, link graphs, and breadcrumbs from parsed docs.

:class:`NavigationBuilder` turns the sections and cross-references extracted
from Markdown documents into the :class:`~docsmith.navigation.models.NavigationState`
consumed by a presentation layer. The builder accumulates a route map and a
link map across calls; call :meth:`NavigationBuilder.clear` (or build a fresh
instance) at the start of each build.

Example
-------
>>> from docsmith.navigation.builder import NavigationBuilder
>>> trail = NavigationBuilder().derive_breadcrumbs("/docs/guide/getting-started")
>>> [item.title for item in trail.items], trail.current.title
(['Documentation', 'Guide'], 'Getting Started')
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import posixpath
import re
from urllib.parse import urlsplit

from docsmith._constants import DESCRIPTION_LIMIT, ROOT_PATH, ROOT_TITLE
from docsmith.errors import ErrorKind

from .models import (
    AnchorLink,
    BreadcrumbItem,
    BreadcrumbTrail,
    ContentSection,
    CrossReference,
    LinkGraphEntry,
    LinkKind,
    LinkMap,
    NavigationState,
    ParsedDocument,
    ProcessedLink,
    RouteEntry,
    RouteMap,
    TableOfContents,
    TOCNode,
)

logger = logging.getLogger(__name__)

LINK_ID_UNSAFE = re.compile(r"[^a-zA-Z0-9-]")
SENTENCE_SPLIT = re.compile(r"[.!?]+")
WORD_SPLIT = re.compile(r"[-_]")


class NavigationBuilder:
    """Derive navigation structures from parsed documents."""

    def __init__(
        self,
        known_routes: cabc.Iterable[str] = (),
        *,
        root_path: str = ROOT_PATH,
        root_title: str = ROOT_TITLE,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        known_routes : Iterable[str], optional
            Route paths supplied by document discovery (for example
            ``/docs/guide``). Internal links resolve against these and the
            section routes registered via :meth:`create_section_routes`.
        root_path : str, optional
            Href of the breadcrumb root; defaults to ``/docs``.
        root_title : str, optional
            Title of the breadcrumb root; defaults to ``Documentation``.
        """
        self.known_routes = list(dict.fromkeys(known_routes))
        self.root_path = root_path.rstrip("/") or "/"
        self.root_title = root_title
        self.route_map: RouteMap = {}
        self.link_map: LinkMap = {}

    def clear(self) -> None:
        """Forget accumulated section routes and links."""
        self.route_map = {}
        self.link_map = {}

    def build_toc(self, documents: cabc.Iterable[ParsedDocument]) -> TableOfContents:
        """Return the table of contents for every section of ``documents``.

        Sections are flattened in document order and nested with a monotonic
        stack: a section becomes a child of the nearest preceding section
        whose level is strictly lower, or a root when there is none.
        """
        nodes: list[TOCNode] = []
        anchors: list[AnchorLink] = []
        depth = 0
        for document in documents:
            for section in document.sections:
                depth = max(depth, section.level)
                nodes.append(
                    TOCNode(
                        id=section.id,
                        title=section.title,
                        level=section.level,
                        anchor=section.anchor,
                    )
                )
                anchors.append(
                    AnchorLink(
                        id=section.id,
                        text=section.title,
                        href=f"#{section.anchor}",
                        level=section.level,
                    )
                )
        return TableOfContents(
            sections=build_hierarchy(nodes), depth=depth, anchors=anchors
        )

    def create_section_routes(
        self, sections: cabc.Iterable[ContentSection]
    ) -> RouteMap:
        """Register ``#anchor`` routes for ``sections`` and return them."""
        routes: RouteMap = {
            f"#{section.anchor}": RouteEntry(
                section_id=section.id,
                anchor=section.anchor,
                title=section.title,
                description=extract_description(section.content),
            )
            for section in sections
        }
        self.route_map.update(routes)
        return routes

    def build_cross_links(self, references: cabc.Iterable[CrossReference]) -> LinkMap:
        """Resolve ``references`` and index them by source and target.

        Every link is appended to its source's ``outgoing`` list. Internal
        links are also appended to the target's ``incoming`` list, and anchor
        links to the source's own ``incoming`` list since the fragment lives in
        the source document. External links never populate ``incoming``.
        """
        link_map: LinkMap = {}
        for reference in references:
            link = self.process_reference(reference)
            link_map.setdefault(reference.source, LinkGraphEntry()).outgoing.append(
                link
            )
            match reference.kind:
                case LinkKind.INTERNAL:
                    target_key = reference.target
                case LinkKind.ANCHOR:
                    target_key = reference.source
                case _:
                    continue
            link_map.setdefault(target_key, LinkGraphEntry()).incoming.append(link)

        for key, entry in link_map.items():
            merged = self.link_map.setdefault(key, LinkGraphEntry())
            merged.outgoing.extend(entry.outgoing)
            merged.incoming.extend(entry.incoming)
        return link_map

    def process_reference(self, reference: CrossReference) -> ProcessedLink:
        """Return the resolved form of a single cross-reference."""
        resolved = self.resolve_link(reference.target, reference.kind)
        if not resolved:
            logger.debug(
                "%s: %s -> %s (%s)",
                ErrorKind.LINK_UNRESOLVED,
                reference.source,
                reference.target,
                reference.kind,
            )
        href = None
        if resolved:
            href = (
                self.resolve_internal_href(reference.target)
                if reference.kind is LinkKind.INTERNAL
                else reference.target
            )
        return ProcessedLink(
            id=link_id(reference),
            source=reference.source,
            target=reference.target,
            kind=reference.kind,
            text=reference.text,
            resolved=resolved,
            href=href,
        )

    def resolve_link(self, target: str, kind: LinkKind) -> bool:
        """Return whether ``target`` can be resolved for a link of ``kind``."""
        match kind:
            case LinkKind.ANCHOR:
                return target.startswith("#") and len(target) > 1
            case LinkKind.INTERNAL:
                return self.route_exists(target)
            case LinkKind.EXTERNAL:
                return is_absolute_url(target)
            case _:
                return False

    def route_exists(self, target: str) -> bool:
        """Return True when a known route equals or contains ``target``."""
        if not target:
            return False
        routes = [*self.known_routes, *self.route_map]
        return target in routes or any(target in route for route in routes)

    def resolve_internal_href(self, target: str, base_path: str = "") -> str:
        """Return the href a presentation layer should use for ``target``.

        Anchors and absolute paths are returned unchanged, ``./`` and ``../``
        paths are resolved against ``base_path``, and bare targets are taken
        as relative to the docs root.
        """
        if target.startswith(("#", "/")):
            return target
        if target.startswith(("./", "../")):
            return resolve_relative_path(target, base_path)
        return f"{self.root_path.rstrip('/')}/{target}"

    def derive_breadcrumbs(self, path: str) -> BreadcrumbTrail:
        """Return the breadcrumb trail for ``path``.

        The root item is always present. Segments matching the root path's
        own segment (``docs``) are skipped; the others are title-cased by
        splitting on ``-`` and ``_``. The last item becomes ``current`` and
        is excluded from ``items``.
        """
        root_segment = posixpath.basename(self.root_path)
        segments = [
            segment
            for segment in path.split("#", 1)[0].split("/")
            if segment and segment != root_segment
        ]
        items = [BreadcrumbItem(title=self.root_title, href=self.root_path)]
        href = self.root_path.rstrip("/")
        for position, segment in enumerate(segments):
            href = f"{href}/{segment}"
            items.append(
                BreadcrumbItem(
                    title=format_breadcrumb_title(segment),
                    href=href,
                    is_active=position == len(segments) - 1,
                )
            )
        return BreadcrumbTrail(items=items[:-1], current=items[-1])

    def navigation_state(
        self, current_path: str, documents: cabc.Sequence[ParsedDocument]
    ) -> NavigationState:
        """Return the navigation state for ``current_path``.

        The link graph is whatever has been accumulated through
        :meth:`build_cross_links`.
        """
        _, _, fragment = current_path.partition("#")
        return NavigationState(
            current_path=current_path,
            current_section=fragment or None,
            breadcrumbs=self.derive_breadcrumbs(current_path),
            toc=self.build_toc(documents),
            cross_links=self.link_map,
        )


def build_hierarchy(nodes: cabc.Iterable[TOCNode]) -> list[TOCNode]:
    """Nest ``nodes`` by level using a monotonic stack and return the roots."""
    roots: list[TOCNode] = []
    stack: list[TOCNode] = []
    for node in nodes:
        while stack and stack[-1].level >= node.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)
    return roots


def link_id(reference: CrossReference) -> str:
    """Return a stable id for ``reference`` built from source, target, and kind."""
    raw = f"{reference.source}-{reference.target}-{reference.kind.value}"
    return LINK_ID_UNSAFE.sub("-", raw)


def is_absolute_url(target: str) -> bool:
    """Return True when ``target`` has both a scheme and a network location."""
    try:
        parts = urlsplit(target)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def format_breadcrumb_title(segment: str) -> str:
    """Title-case a path segment, treating ``-`` and ``_`` as word breaks."""
    return " ".join(word[:1].upper() + word[1:] for word in WORD_SPLIT.split(segment))


def resolve_relative_path(target: str, base_path: str) -> str:
    """Resolve a ``./`` or ``../`` target against ``base_path``."""
    segments = [segment for segment in base_path.split("/") if segment]
    for segment in target.split("/"):
        if segment == "..":
            if segments:
                segments.pop()
        elif segment and segment != ".":
            segments.append(segment)
    return "/" + "/".join(segments)


def extract_description(content: str) -> str:
    """Return the first sentence of ``content`` or a truncated prefix."""
    first_sentence = SENTENCE_SPLIT.split(content, maxsplit=1)[0].strip()
    if first_sentence and len(first_sentence) <= DESCRIPTION_LIMIT:
        return first_sentence
    suffix = "..." if len(content) > DESCRIPTION_LIMIT else ""
    return content[:DESCRIPTION_LIMIT].strip() + suffix


def create_navigation_state(
    current_path: str,
    documents: cabc.Sequence[ParsedDocument],
    known_routes: cabc.Iterable[str] = (),
    *,
    root_path: str = ROOT_PATH,
    root_title: str = ROOT_TITLE,
) -> NavigationState:
    """Build routes and links for ``documents`` and return the navigation state.

    Parameters
    ----------
    current_path : str
        Path of the page being viewed, optionally with a ``#fragment``.
    documents : Sequence[ParsedDocument]
        Parsed documents in sidebar order.
    known_routes : Iterable[str], optional
        Routes produced by document discovery, used to resolve internal links.
    root_path, root_title : str, optional
        Breadcrumb root settings.

    Returns
    -------
    NavigationState
        Fresh state; no builder state leaks between calls.
    """
    builder = NavigationBuilder(
        known_routes, root_path=root_path, root_title=root_title
    )
    for document in documents:
        builder.create_section_routes(document.sections)
    for document in documents:
        builder.build_cross_links(document.references)
    return builder.navigation_state(current_path, documents)


__all__ = [
    "NavigationBuilder",
    "build_hierarchy",
    "create_navigation_state",
    "extract_description",
    "format_breadcrumb_title",
    "is_absolute_url",
    "link_id",
    "resolve_relative_path",
]

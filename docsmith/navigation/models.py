"""Dataclasses describing documents, cross-references, and navigation state."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class LinkKind(enum.StrEnum):
    """Where a cross-reference points."""

    INTERNAL = "internal"
    EXTERNAL = "external"
    ANCHOR = "anchor"


@dc.dataclass(slots=True)
class ContentSection:
    """A heading and the Markdown that follows it up to the next heading.

    Attributes
    ----------
    id : str
        Document-unique identifier (``section-1``, ``section-2``…).
    title : str
        Heading text.
    level : int
        Heading level between 1 and 6.
    content : str
        Markdown body excluding the heading line.
    anchor : str
        URL fragment (without ``#``) unique within the document.
    parent_id : str or None
        Id of the nearest preceding section with a lower level.
    child_ids : list[str]
        Ids of sections nested directly under this one, in order.
    word_count : int
        Whitespace-delimited words in ``content``.
    estimated_read_time : int
        Minutes needed to read ``content``; at least 1.
    """

    id: str
    title: str
    level: int
    content: str
    anchor: str
    parent_id: str | None = None
    child_ids: list[str] = dc.field(default_factory=list)
    word_count: int = 0
    estimated_read_time: int = 1


@dc.dataclass(frozen=True, slots=True)
class CrossReference:
    """A link discovered in a document."""

    source: str
    target: str
    kind: LinkKind
    text: str


@dc.dataclass(slots=True)
class ParsedDocument:
    """Sections and cross-references extracted from one Markdown document."""

    doc_id: str
    body: str
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)
    sections: list[ContentSection] = dc.field(default_factory=list)
    references: list[CrossReference] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class TOCNode:
    """Entry in the table-of-contents forest."""

    id: str
    title: str
    level: int
    anchor: str
    children: list[TOCNode] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class AnchorLink:
    """Flat heading link used for scroll-spy style navigation."""

    id: str
    text: str
    href: str
    level: int


@dc.dataclass(slots=True)
class TableOfContents:
    """Hierarchical headings plus the flat anchor list in document order."""

    sections: list[TOCNode] = dc.field(default_factory=list)
    depth: int = 0
    anchors: list[AnchorLink] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class RouteEntry:
    """Route registered for a section anchor."""

    section_id: str
    anchor: str
    title: str
    description: str


@dc.dataclass(frozen=True, slots=True)
class ProcessedLink:
    """Cross-reference after resolution.

    ``href`` is only set for resolved links.
    """

    id: str
    source: str
    target: str
    kind: LinkKind
    text: str
    resolved: bool
    href: str | None = None


@dc.dataclass(slots=True)
class LinkGraphEntry:
    """Outgoing and incoming links for one document or anchor target."""

    outgoing: list[ProcessedLink] = dc.field(default_factory=list)
    incoming: list[ProcessedLink] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class BreadcrumbItem:
    """One step of a breadcrumb trail."""

    title: str
    href: str
    is_active: bool = False


@dc.dataclass(frozen=True, slots=True)
class BreadcrumbTrail:
    """Ancestors of the current page plus the current page itself."""

    items: list[BreadcrumbItem]
    current: BreadcrumbItem


@dc.dataclass(slots=True)
class NavigationState:
    """Everything a presentation layer needs to draw sidebars and trails."""

    current_path: str
    breadcrumbs: BreadcrumbTrail
    toc: TableOfContents
    cross_links: dict[str, LinkGraphEntry]
    current_section: str | None = None


LinkMap: typ.TypeAlias = dict[str, LinkGraphEntry]
RouteMap: typ.TypeAlias = dict[str, RouteEntry]

__all__ = [
    "AnchorLink",
    "BreadcrumbItem",
    "BreadcrumbTrail",
    "ContentSection",
    "CrossReference",
    "LinkGraphEntry",
    "LinkKind",
    "LinkMap",
    "NavigationState",
    "ParsedDocument",
    "ProcessedLink",
    "RouteEntry",
    "RouteMap",
    "TOCNode",
    "TableOfContents",
]

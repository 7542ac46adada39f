"""Navigation model: table of contents, breadcrumbs, and the link graph."""

from .anchors import create_anchor_link, generate_anchor_id, unique_anchor_id
from .builder import NavigationBuilder, build_hierarchy, create_navigation_state
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
    TableOfContents,
    TOCNode,
)

__all__ = [
    "AnchorLink",
    "BreadcrumbItem",
    "BreadcrumbTrail",
    "ContentSection",
    "CrossReference",
    "LinkGraphEntry",
    "LinkKind",
    "LinkMap",
    "NavigationBuilder",
    "NavigationState",
    "ParsedDocument",
    "ProcessedLink",
    "RouteEntry",
    "TOCNode",
    "TableOfContents",
    "build_hierarchy",
    "create_anchor_link",
    "create_navigation_state",
    "generate_anchor_id",
    "unique_anchor_id",
]

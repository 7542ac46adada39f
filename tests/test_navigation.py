"""Unit tests for the navigation builder.

These tests cover table-of-contents nesting, link resolution and the link
graph, breadcrumb derivation, and the one-shot ``create_navigation_state``
helper used by the CLI.
"""

from __future__ import annotations

import logging

import pytest

from docsmith.navigation.builder import (
    NavigationBuilder,
    create_navigation_state,
    extract_description,
    link_id,
)
from docsmith.navigation.models import (
    ContentSection,
    CrossReference,
    LinkKind,
    ParsedDocument,
)


def _section(index: int, level: int, title: str | None = None) -> ContentSection:
    name = title or f"Heading {index}"
    return ContentSection(
        id=f"section-{index}",
        title=name,
        level=level,
        content=f"Body of {name}. More text.",
        anchor=name.lower().replace(" ", "-"),
    )


def _document(doc_id: str, *levels: int) -> ParsedDocument:
    return ParsedDocument(
        doc_id=doc_id,
        body="",
        sections=[_section(i + 1, level) for i, level in enumerate(levels)],
    )


def test_toc_nests_sections_by_level() -> None:
    """Levels [1, 2, 2, 1] give two roots; the first owns two children."""
    toc = NavigationBuilder().build_toc([_document("doc", 1, 2, 2, 1)])
    assert len(toc.sections) == 2, f"expected 2 roots, got {len(toc.sections)}"
    assert [len(node.children) for node in toc.sections] == [2, 0], (
        "expected the first root to own both level-2 sections"
    )
    assert toc.depth == 2, f"expected depth 2, got {toc.depth}"
    assert [anchor.href for anchor in toc.anchors] == [
        "#heading-1",
        "#heading-2",
        "#heading-3",
        "#heading-4",
    ], "anchors should be flat and in document order"


def test_toc_attaches_to_nearest_lower_level() -> None:
    """A level-3 heading after a level-2 heading nests under it."""
    toc = NavigationBuilder().build_toc([_document("doc", 2, 3, 1, 3)])
    first, second = toc.sections
    assert [child.id for child in first.children] == ["section-2"], (
        "level 3 should nest under the preceding level 2"
    )
    assert [child.id for child in second.children] == ["section-4"], (
        "level 3 should nest under the preceding level 1"
    )


def test_toc_flattens_documents_in_order() -> None:
    """Sections from several documents keep their relative order."""
    toc = NavigationBuilder().build_toc(
        [_document("a", 1, 2), _document("b", 1)]
    )
    assert [node.level for node in toc.sections] == [1, 1], "expected two roots"
    assert len(toc.anchors) == 3, "every section should produce an anchor"


@pytest.mark.parametrize(
    ("target", "kind", "expected"),
    [
        ("#install", LinkKind.ANCHOR, True),
        ("#", LinkKind.ANCHOR, False),
        ("/docs/guide", LinkKind.INTERNAL, True),
        ("guide", LinkKind.INTERNAL, True),
        ("/docs/missing", LinkKind.INTERNAL, False),
        ("", LinkKind.INTERNAL, False),
        ("https://example.com/x", LinkKind.EXTERNAL, True),
        ("example.com", LinkKind.EXTERNAL, False),
    ],
)
def test_resolve_link(target: str, kind: LinkKind, expected: bool) -> None:
    """Each link kind has its own resolution rule."""
    builder = NavigationBuilder(["/docs", "/docs/guide"])
    assert builder.resolve_link(target, kind) is expected, (
        f"resolve_link({target!r}, {kind}) should be {expected}"
    )


def test_cross_links_populate_incoming_for_internal_and_anchor_links() -> None:
    """External links only appear in the source's outgoing list."""
    builder = NavigationBuilder(["/docs", "/docs/guide"])
    references = [
        CrossReference("index", "/docs/guide", LinkKind.INTERNAL, "Guide"),
        CrossReference("index", "#intro", LinkKind.ANCHOR, "Intro"),
        CrossReference("index", "https://example.com", LinkKind.EXTERNAL, "Site"),
    ]
    link_map = builder.build_cross_links(references)
    assert len(link_map["index"].outgoing) == 3, "every link is outgoing"
    assert [link.target for link in link_map["/docs/guide"].incoming] == [
        "/docs/guide"
    ], "internal links reach their target"
    assert [link.target for link in link_map["index"].incoming] == ["#intro"], (
        "anchor links point back into the source document"
    )
    assert "https://example.com" not in link_map, (
        "external links never create incoming entries"
    )
    assert all(link.resolved for link in link_map["index"].outgoing), (
        "all three links should resolve"
    )
    assert link_map["index"].outgoing[0].href == "/docs/guide", "unexpected href"


def test_unresolved_links_have_no_href(caplog: pytest.LogCaptureFixture) -> None:
    """Unknown internal targets stay in the graph flagged as unresolved."""
    builder = NavigationBuilder(["/docs"])
    with caplog.at_level(logging.DEBUG, logger="docsmith.navigation.builder"):
        link_map = builder.build_cross_links(
            [CrossReference("index", "/docs/missing", LinkKind.INTERNAL, "Gone")]
        )
    [link] = link_map["index"].outgoing
    assert (link.resolved, link.href) == (False, None), f"unexpected link {link!r}"
    assert "link-unresolved" in caplog.text, "unresolved links should be logged"


def test_link_ids_are_stable_and_safe() -> None:
    """Link ids only contain letters, digits, and hyphens."""
    reference = CrossReference("guide/setup", "/docs/a b", LinkKind.INTERNAL, "x")
    assert link_id(reference) == "guide-setup--docs-a-b-internal", (
        f"unexpected id {link_id(reference)!r}"
    )


def test_link_map_accumulates_until_cleared() -> None:
    """Repeated builds merge into the builder's link map until clear()."""
    builder = NavigationBuilder(["/docs"])
    reference = CrossReference("index", "/docs", LinkKind.INTERNAL, "Home")
    builder.build_cross_links([reference])
    builder.build_cross_links([reference])
    assert len(builder.link_map["index"].outgoing) == 2, "links should accumulate"
    builder.clear()
    assert builder.link_map == {}, "clear() should reset the link map"
    assert builder.route_map == {}, "clear() should reset the route map"


def test_section_routes_register_anchor_targets() -> None:
    """Section anchors become routes that internal links can resolve against."""
    builder = NavigationBuilder()
    routes = builder.create_section_routes([_section(1, 2, "Install")])
    entry = routes["#install"]
    assert (entry.section_id, entry.title) == ("section-1", "Install"), (
        f"unexpected route entry {entry!r}"
    )
    assert entry.description == "Body of Install", (
        f"unexpected description {entry.description!r}"
    )
    assert builder.route_exists("install"), "section routes should be searchable"


def test_breadcrumbs_for_nested_path() -> None:
    """The root is seeded and the last segment becomes the current item."""
    trail = NavigationBuilder().derive_breadcrumbs("/docs/guide/getting-started")
    assert [item.title for item in trail.items] == ["Documentation", "Guide"], (
        "unexpected breadcrumb titles"
    )
    assert [item.href for item in trail.items] == ["/docs", "/docs/guide"], (
        "hrefs should accumulate the visited segments"
    )
    assert trail.current.title == "Getting Started", "unexpected current title"
    assert trail.current.href == "/docs/guide/getting-started", "unexpected href"
    assert trail.current.is_active, "the current item should be active"


def test_breadcrumbs_for_root_path() -> None:
    """The docs root itself is the current item with no ancestors."""
    trail = NavigationBuilder().derive_breadcrumbs("/docs")
    assert trail.items == [], "the root has no ancestors"
    assert trail.current.title == "Documentation", "unexpected current title"


def test_breadcrumbs_ignore_fragment_and_split_underscores() -> None:
    """Fragments are dropped and underscores separate words."""
    trail = NavigationBuilder().derive_breadcrumbs("/docs/api_reference#usage")
    assert trail.current.title == "Api Reference", (
        f"unexpected title {trail.current.title!r}"
    )


@pytest.mark.parametrize(
    ("target", "base", "expected"),
    [
        ("#top", "", "#top"),
        ("/docs/api", "", "/docs/api"),
        ("./setup", "/docs/guide", "/docs/guide/setup"),
        ("../api", "/docs/guide", "/docs/api"),
        ("setup", "", "/docs/setup"),
    ],
)
def test_resolve_internal_href(target: str, base: str, expected: str) -> None:
    """Internal hrefs are made absolute under the docs root."""
    actual = NavigationBuilder().resolve_internal_href(target, base)
    assert actual == expected, f"expected {expected!r}, got {actual!r}"


def test_extract_description_truncates_long_text() -> None:
    """Text without a short first sentence is truncated with an ellipsis."""
    text = "word " * 60
    description = extract_description(text)
    assert description.endswith("..."), "long descriptions should be truncated"
    assert len(description) <= 153, f"description too long: {len(description)}"


def test_create_navigation_state_is_fresh_per_call() -> None:
    """Each call builds its own link graph and reads the current section."""
    documents = [
        ParsedDocument(
            doc_id="index",
            body="",
            sections=[_section(1, 1, "Home")],
            references=[
                CrossReference("index", "/docs/guide", LinkKind.INTERNAL, "Guide")
            ],
        ),
        _document("guide", 1, 2),
    ]
    routes = ["/docs", "/docs/guide"]
    first = create_navigation_state("/docs/guide#install", documents, routes)
    second = create_navigation_state("/docs/guide", documents, routes)
    assert first.current_section == "install", "fragment should select a section"
    assert second.current_section is None, "no fragment means no section"
    assert first.breadcrumbs.current.title == "Guide", "unexpected breadcrumb"
    assert len(first.toc.anchors) == 3, "toc should cover every document"
    assert len(second.cross_links["index"].outgoing) == 1, (
        "state must not leak links between calls"
    )
    assert first.cross_links["/docs/guide"].incoming[0].resolved, (
        "links to discovered routes should resolve"
    )

"""Unit tests for Markdown section extraction."""

from __future__ import annotations

from textwrap import dedent

import pytest

from docsmith.errors import FrontmatterError
from docsmith.markdown_parser import estimate_read_time, parse_document, parse_sections
from docsmith.navigation.models import LinkKind


def test_sections_form_a_heading_forest() -> None:
    """Parent and child ids follow the heading levels."""
    sections = parse_sections(
        dedent(
            """\
            # A
            text one two
            ## B
            three
            ### C
            ## D
            # E
            """
        )
    )
    assert [s.id for s in sections] == [f"section-{i}" for i in range(1, 6)], (
        "section ids should be sequential"
    )
    assert [s.parent_id for s in sections] == [
        None,
        "section-1",
        "section-2",
        "section-1",
        None,
    ], "unexpected parents"
    assert sections[0].child_ids == ["section-2", "section-4"], (
        f"unexpected children {sections[0].child_ids!r}"
    )
    assert sections[0].content == "text one two", "content stops at the next heading"
    assert sections[0].word_count == 3, "expected three words"


def test_headings_inside_fences_are_ignored() -> None:
    """Hash lines in fenced code blocks are not headings."""
    sections = parse_sections(
        "# Real\n```bash\n# not a heading\n```\n~~~\n## also not\n~~~\n## Sub\n"
    )
    assert [s.title for s in sections] == ["Real", "Sub"], (
        f"unexpected titles {[s.title for s in sections]!r}"
    )
    assert "# not a heading" in sections[0].content, (
        "code stays part of the section body"
    )


def test_duplicate_headings_get_unique_anchors() -> None:
    """Repeated titles are suffixed so anchors stay unique."""
    sections = parse_sections("## Setup\n## Setup\n## Setup\n")
    assert [s.anchor for s in sections] == ["setup", "setup-2", "setup-3"], (
        "unexpected anchors"
    )


@pytest.mark.parametrize(
    ("line", "title", "anchor"),
    [
        ("## Install {#install-guide}", "Install", "install-guide"),
        ("## Closing hashes ##", "Closing hashes", "closing-hashes"),
        ("### Using \\_private", "Using _private", "using-_private"),
    ],
)
def test_heading_text_is_cleaned(line: str, title: str, anchor: str) -> None:
    """Explicit ids, closing hashes, and escapes are handled."""
    [section] = parse_sections(line)
    assert (section.title, section.anchor) == (title, anchor), (
        f"unexpected title/anchor {(section.title, section.anchor)!r}"
    )


def test_text_without_headings_has_no_sections() -> None:
    """Only ATX headings with a space after the hashes start sections."""
    assert parse_sections("#NoSpace\nplain text\n") == [], "expected no sections"


def test_read_time_rounds_up() -> None:
    """Read time is the ceiling of words per minute, never below one."""
    [section] = parse_sections("# Long\n" + "word " * 401, words_per_minute=200)
    assert section.word_count == 401, f"unexpected count {section.word_count}"
    assert section.estimated_read_time == 3, "401 words at 200 wpm is 3 minutes"
    assert estimate_read_time(0) == 1, "empty sections still take a minute"


def test_parse_document_splits_front_matter_and_links() -> None:
    """Metadata, body, sections, and references are extracted together."""
    text = dedent(
        """\
        ---
        title: Intro
        ---
        # Intro
        Read the [guide](./guide.md), jump to [setup](#setup), or visit
        [the site](https://example.com).

        ```
        [ignored](ignored.md)
        ```
        """
    )
    document = parse_document(text, "index", base_path="/docs")
    assert document.metadata == {"title": "Intro"}, "front matter should be parsed"
    assert document.body.startswith("# Intro"), "the body excludes front matter"
    assert [s.title for s in document.sections] == ["Intro"], "unexpected sections"
    assert [(r.kind, r.target) for r in document.references] == [
        (LinkKind.INTERNAL, "/docs/guide"),
        (LinkKind.ANCHOR, "#setup"),
        (LinkKind.EXTERNAL, "https://example.com"),
    ], f"unexpected references {document.references!r}"
    assert all(r.source == "index" for r in document.references), (
        "every reference records its source document"
    )


def test_parse_document_rejects_broken_front_matter() -> None:
    """Unparsable front matter raises a FrontmatterError."""
    with pytest.raises(FrontmatterError, match="Invalid YAML"):
        parse_document("---\ntitle: [unclosed\n---\n# Body\n", "broken")

r"""Parse Markdown documents into sections and cross-references.

This module splits a document into one :class:`ContentSection` per ATX
heading (levels 1–6), links sections into a parent/child forest, and
collects the document's links. The resulting :class:`ParsedDocument` feeds
the navigation builder.

Example
-------
>>> from docsmith.markdown_parser import parse_document
>>> doc = parse_document("# Intro\nBody text\n\n## Details\nMore", "intro")
>>> [(s.title, s.level, s.parent_id) for s in doc.sections]
[('Intro', 1, None), ('Details', 2, 'section-1')]
"""

from __future__ import annotations

import math
import re

from docsmith._constants import WORDS_PER_MINUTE
from docsmith.frontmatter import split_frontmatter
from docsmith.link_collector import collect_references
from docsmith.navigation.anchors import unique_anchor_id
from docsmith.navigation.models import ContentSection, ParsedDocument

HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
FENCE_PATTERN = re.compile(r"^[ ]{0,3}(`{3,}|~{3,})")
EXPLICIT_ID_PATTERN = re.compile(r"\s*\{#([A-Za-z][\w-]*)\}$")


def _clean_heading(text: str) -> str:
    """Return a cleaned heading, removing escapes and whitespace."""
    return text.replace("\\", "").strip()


def _find_headings(body: str) -> list[tuple[int, int, int, str]]:
    """Return ``(start, end, level, title)`` for headings outside code fences."""
    headings: list[tuple[int, int, int, str]] = []
    fence: str | None = None
    offset = 0
    for line in body.splitlines(keepends=True):
        start = offset
        offset += len(line)
        stripped = line.rstrip("\r\n")
        fence_match = FENCE_PATTERN.match(stripped)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
            continue
        if fence is not None:
            continue
        match = HEADING_PATTERN.match(stripped)
        if match:
            headings.append((start, offset, len(match.group(1)), match.group(2)))
    return headings


def count_words(text: str) -> int:
    """Return the number of whitespace-delimited words in ``text``."""
    return len(text.split())


def estimate_read_time(
    word_count: int, words_per_minute: int = WORDS_PER_MINUTE
) -> int:
    """Return whole minutes to read ``word_count`` words, never less than one."""
    return max(1, math.ceil(word_count / words_per_minute))


def parse_sections(
    markdown_text: str, *, words_per_minute: int = WORDS_PER_MINUTE
) -> list[ContentSection]:
    """Split markdown into ordered sections linked into a heading forest.

    Parameters
    ----------
    markdown_text : str
        Markdown body without front matter.
    words_per_minute : int, optional
        Reading speed used for ``estimated_read_time``.

    Returns
    -------
    list[ContentSection]
        Sections in document order. Each section's content runs to the next
        heading of any level. A heading may carry an explicit ``{#anchor}``
        suffix; other anchors are slugs made unique within the document.
        Returns an empty list when the text has no ATX headings.
    """
    headings = _find_headings(markdown_text)
    sections: list[ContentSection] = []
    stack: list[ContentSection] = []
    used_anchors: set[str] = set()
    for idx, (_start, end, level, raw_title) in enumerate(headings):
        next_start = (
            headings[idx + 1][0] if idx + 1 < len(headings) else len(markdown_text)
        )
        content = markdown_text[end:next_start].strip()
        explicit = EXPLICIT_ID_PATTERN.search(raw_title)
        if explicit:
            raw_title = raw_title[: explicit.start()]
            anchor = explicit.group(1)
            used_anchors.add(anchor)
        else:
            anchor = unique_anchor_id(_clean_heading(raw_title), used_anchors)
        words = count_words(content)
        section = ContentSection(
            id=f"section-{idx + 1}",
            title=_clean_heading(raw_title),
            level=level,
            content=content,
            anchor=anchor,
            word_count=words,
            estimated_read_time=estimate_read_time(words, words_per_minute),
        )
        while stack and stack[-1].level >= level:
            stack.pop()
        if stack:
            section.parent_id = stack[-1].id
            stack[-1].child_ids.append(section.id)
        stack.append(section)
        sections.append(section)
    return sections


def parse_document(
    text: str,
    doc_id: str,
    *,
    words_per_minute: int = WORDS_PER_MINUTE,
    base_path: str | None = None,
) -> ParsedDocument:
    """Parse a full Markdown document, front matter included.

    Parameters
    ----------
    text : str
        Raw document text, optionally starting with a ``---`` YAML block.
    doc_id : str
        Identifier recorded as the source of every cross-reference.
    words_per_minute : int, optional
        Reading speed used for section read-time estimates.
    base_path : str, optional
        Route directory used to resolve relative internal links.

    Returns
    -------
    ParsedDocument
        Metadata, body, sections, and cross-references.

    Raises
    ------
    FrontmatterError
        If the front matter is not a valid YAML mapping.
    """
    metadata, body = split_frontmatter(text)
    return ParsedDocument(
        doc_id=doc_id,
        body=body,
        metadata=metadata,
        sections=parse_sections(body, words_per_minute=words_per_minute),
        references=collect_references(body, doc_id, base_path=base_path),
    )


__all__ = [
    "count_words",
    "estimate_read_time",
    "parse_document",
    "parse_sections",
]

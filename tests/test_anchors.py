"""Unit tests for heading anchor helpers."""

from __future__ import annotations

import pytest

from docsmith.navigation.anchors import (
    create_anchor_link,
    generate_anchor_id,
    is_valid_anchor_id,
    sanitize_anchor_id,
    unique_anchor_id,
)
from docsmith.navigation.models import AnchorLink


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Getting Started", "getting-started"),
        ("Hello, World!", "hello-world"),
        ("  Padded  ", "padded"),
        ("API Reference & Examples", "api-reference-examples"),
    ],
)
def test_generate_anchor_id(text: str, expected: str) -> None:
    """Headings slugify to lowercase hyphenated fragments."""
    assert generate_anchor_id(text) == expected, f"unexpected slug for {text!r}"


def test_unique_anchor_id_adds_numeric_suffixes() -> None:
    """Repeated headings get -2, -3 suffixes within one document."""
    used: set[str] = set()
    anchors = [unique_anchor_id("Setup", used) for _ in range(3)]
    assert anchors == ["setup", "setup-2", "setup-3"], f"unexpected {anchors!r}"


def test_unique_anchor_id_falls_back_for_empty_slugs() -> None:
    """Headings without slug characters still get an anchor."""
    used: set[str] = set()
    assert unique_anchor_id("!!!", used) == "section", "expected the fallback"
    assert unique_anchor_id("???", used) == "section-2", "expected a suffix"


def test_create_anchor_link() -> None:
    """Anchor links carry an id, the heading text, and a fragment href."""
    link = create_anchor_link("Getting Started", 2)
    assert link == AnchorLink(
        id="anchor-getting-started",
        text="Getting Started",
        href="#getting-started",
        level=2,
    ), f"unexpected link {link!r}"


@pytest.mark.parametrize(
    ("anchor", "expected"),
    [("intro", True), ("intro-2_b", True), ("2intro", False), ("a b", False)],
)
def test_is_valid_anchor_id(anchor: str, expected: bool) -> None:
    """Valid anchors start with a letter and contain only id-safe characters."""
    assert is_valid_anchor_id(anchor) is expected, f"unexpected result for {anchor!r}"


@pytest.mark.parametrize(
    ("anchor", "expected"),
    [("1 Intro!", "Intro"), ("123", "heading"), ("a  b", "a-b")],
)
def test_sanitize_anchor_id(anchor: str, expected: str) -> None:
    """Sanitised anchors always pass validation."""
    sanitized = sanitize_anchor_id(anchor)
    assert sanitized == expected, f"expected {expected!r}, got {sanitized!r}"
    assert is_valid_anchor_id(sanitized), f"{sanitized!r} should be valid"

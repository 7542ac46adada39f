"""Collect cross-references from Markdown via a python-markdown extension.

Insert :class:`LinkCollectorExtension` into a ``markdown.Markdown`` instance
to record every ``<a href>`` produced while converting a document. Links are
classified as in-page anchors, external URLs, or internal doc links; relative
internal targets (``./setup.md``, ``../guide/index.md``) are normalised into
site routes when a base path is supplied.
"""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from docsmith._constants import MARKDOWN_SUFFIXES
from docsmith.navigation.models import CrossReference, LinkKind

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "ftp://", "data:")


def classify_link(target: str) -> LinkKind:
    """Return the :class:`LinkKind` of an href."""
    if target.startswith("#"):
        return LinkKind.ANCHOR
    lower = target.lower()
    if lower.startswith(EXTERNAL_PREFIXES) or target.startswith("//"):
        return LinkKind.EXTERNAL
    if "://" in target or urlsplit(target).scheme:
        return LinkKind.EXTERNAL
    return LinkKind.INTERNAL


def normalize_internal_target(target: str, base_path: str | None) -> str:
    """Return the route an internal href points at.

    The fragment and query are dropped and Markdown suffixes removed.
    Relative paths are joined onto ``base_path`` when one is given; otherwise
    they are returned as written.
    """
    path = urlsplit(target).path
    for suffix in MARKDOWN_SUFFIXES:
        if path.endswith(suffix):
            path = path[: -len(suffix)]
            break
    if posixpath.basename(path) == "index":
        path = posixpath.dirname(path) or ("/" if path.startswith("/") else "")
    if path.startswith("/") or base_path is None:
        return path
    joined = posixpath.normpath(posixpath.join(base_path, path))
    return joined if joined != "." else base_path


class LinkCollectorExtension(Extension):
    """Record the links of a converted document as cross-references."""

    def __init__(self, source: str, base_path: str | None = None) -> None:
        super().__init__()
        self.source = source
        self.base_path = base_path
        self.references: list[CrossReference] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link-collecting treeprocessor on the Markdown instance."""
        processor = LinkCollectorTreeprocessor(md, self)
        md.treeprocessors.register(processor, "docsmith_link_collector", 15)


class LinkCollectorTreeprocessor(Treeprocessor):
    """Walk anchors in the parsed tree and append cross-references."""

    def __init__(self, md: Markdown, extension: LinkCollectorExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> None:
        """Collect every anchor with a non-empty href."""
        for element in root.iter("a"):
            href = (element.get("href") or "").strip()
            if not href:
                continue
            kind = classify_link(href)
            target = href
            if kind is LinkKind.INTERNAL:
                target = normalize_internal_target(href, self.extension.base_path)
                if not target:
                    continue
            text = "".join(element.itertext()).strip()
            self.extension.references.append(
                CrossReference(
                    source=self.extension.source, target=target, kind=kind, text=text
                )
            )


def collect_references(
    markdown_text: str, source: str, *, base_path: str | None = None
) -> list[CrossReference]:
    """Convert ``markdown_text`` and return the links it contains, in order.

    Parameters
    ----------
    markdown_text : str
        Markdown body (front matter already removed).
    source : str
        Identifier of the document, recorded on every reference.
    base_path : str, optional
        Route directory used to resolve relative internal links.

    Returns
    -------
    list[CrossReference]
        References in document order; links inside code blocks are ignored.
    """
    collector = LinkCollectorExtension(source, base_path)
    md = Markdown(extensions=["fenced_code", "tables", collector])
    md.convert(markdown_text)
    return collector.references


__all__ = [
    "LinkCollectorExtension",
    "LinkCollectorTreeprocessor",
    "classify_link",
    "collect_references",
    "normalize_internal_target",
]

r"""Character readers used to tokenize component prop strings.

Each reader starts at a given index and returns the token it consumed together
with the index immediately after it. The readers never raise: unterminated
input yields everything up to the end of the string, and a start index that
does not sit on the expected opening character yields an empty value without
advancing.

Example
-------
>>> from docsmith.components.scanner import read_quoted_string
>>> read_quoted_string('"a \\"b\\"" rest', 0)
ScanResult(value='a "b"', next_index=9)
"""

from __future__ import annotations

import dataclasses as dc

QUOTE_CHARS = frozenset({'"', "'"})


@dc.dataclass(frozen=True, slots=True)
class ScanResult:
    """Token consumed by a reader.

    Attributes
    ----------
    value : str
        The decoded token text.
    next_index : int
        Position immediately after the consumed input; never beyond
        ``len(text)``.
    """

    value: str
    next_index: int


def skip_whitespace(text: str, index: int) -> int:
    """Return the first index at or after ``index`` that is not whitespace."""
    length = len(text)
    while index < length and text[index].isspace():
        index += 1
    return index


def read_quoted_string(text: str, start: int) -> ScanResult:
    """Read a double-quoted string, honouring backslash escapes.

    Parameters
    ----------
    text : str
        Input being scanned.
    start : int
        Index of the opening ``"``.

    Returns
    -------
    ScanResult
        The unescaped string content and the index after the closing quote.
        Unterminated strings consume the rest of ``text``.
    """
    length = len(text)
    if start >= length or text[start] != '"':
        return ScanResult("", start)

    chars: list[str] = []
    escaped = False
    index = start + 1
    while index < length:
        char = text[index]
        if escaped:
            chars.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            return ScanResult("".join(chars), index + 1)
        else:
            chars.append(char)
        index += 1
    return ScanResult("".join(chars), length)


def read_balanced_braces(text: str, start: int) -> ScanResult:
    """Read a ``{...}`` literal, returning the text between the outer braces.

    Braces that appear inside single- or double-quoted strings are ignored so
    ``{"a": "}"}`` is read as one literal. When the closing brace is missing
    the remainder of ``text`` after the opening brace is returned.
    """
    length = len(text)
    if start >= length or text[start] != "{":
        return ScanResult("", start)

    depth = 0
    quote: str | None = None
    escaped = False
    for index in range(start, length):
        char = text[index]
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in QUOTE_CHARS:
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return ScanResult(text[start + 1 : index], index + 1)
    return ScanResult(text[start + 1 :], length)


def read_bare_token(text: str, start: int) -> ScanResult:
    """Read characters up to the next whitespace or the end of ``text``."""
    length = len(text)
    index = start
    while index < length and not text[index].isspace():
        index += 1
    return ScanResult(text[start:index], index)


__all__ = [
    "ScanResult",
    "read_balanced_braces",
    "read_bare_token",
    "read_quoted_string",
    "skip_whitespace",
]

"""Property value kinds and the JSON-like literal parser.

Prop values are plain JSON-shaped Python objects (``str``, ``int``/``float``,
``bool``, ``list``, ``dict``, ``None``) plus the :data:`UNDEFINED` sentinel
for an explicit ``{undefined}`` literal. :func:`classify` maps every value to
exactly one :class:`PropKind`, so schema checks compare kinds rather than
probing Python types ad hoc.

Example
-------
>>> from docsmith.components.values import PropKind, classify, parse_literal
>>> parse_literal("[1, 2, 3]")
[1, 2, 3]
>>> classify(parse_literal("{'key': 'value'}")) is PropKind.OBJECT
True
"""

from __future__ import annotations

import enum
import json
import math
import re
import typing as typ

NUMBER_PATTERN = re.compile(r"-?\d+(\.\d+)?")


class _UndefinedType(enum.Enum):
    """Sentinel type for a prop explicitly set to ``{undefined}``."""

    UNDEFINED = "undefined"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: typ.Final = _UndefinedType.UNDEFINED

PropValue: typ.TypeAlias = (
    str | int | float | bool | list[typ.Any] | dict[str, typ.Any] | None | _UndefinedType
)
PropertyBag: typ.TypeAlias = dict[str, PropValue]


class PropKind(enum.StrEnum):
    """Runtime kind of a prop value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    UNDEFINED = "undefined"


DECLARABLE_KINDS = frozenset(
    {
        PropKind.STRING,
        PropKind.NUMBER,
        PropKind.BOOLEAN,
        PropKind.ARRAY,
        PropKind.OBJECT,
    }
)


def classify(value: object) -> PropKind:
    """Return the :class:`PropKind` of ``value``.

    Raises
    ------
    TypeError
        If ``value`` is not one of the JSON-shaped prop value types.
    """
    match value:
        case _UndefinedType():
            return PropKind.UNDEFINED
        case None:
            return PropKind.NULL
        case bool():
            return PropKind.BOOLEAN
        case int() | float():
            return PropKind.NUMBER
        case str():
            return PropKind.STRING
        case list() | tuple():
            return PropKind.ARRAY
        case dict():
            return PropKind.OBJECT
        case _:
            msg = f"Unsupported prop value type: {type(value).__name__}"
            raise TypeError(msg)


def is_absent(value: object) -> bool:
    """Return True for values that count as "not provided" (null or undefined)."""
    return value is None or value is UNDEFINED


def matches_kind(value: object, kind: PropKind) -> bool:
    """Return True when ``value`` satisfies a declared ``kind``.

    Numbers must not be NaN; values of an unsupported Python type never match.
    """
    try:
        actual = classify(value)
    except TypeError:
        return False
    if actual is not kind:
        return False
    if kind is PropKind.NUMBER:
        return not (isinstance(value, float) and math.isnan(value))
    return True


def _loads(text: str) -> tuple[bool, typ.Any]:
    try:
        return True, json.loads(text)
    except ValueError:
        return False, None


def parse_literal(raw: str) -> PropValue:
    """Parse the body of a ``{...}`` prop literal.

    Parameters
    ----------
    raw : str
        Text between the outer braces of the literal.

    Returns
    -------
    PropValue
        ``True``/``False``/``None``/:data:`UNDEFINED` for the keywords, an
        ``int`` or ``float`` for plain numbers, the decoded JSON for array and
        object literals, and otherwise the literal text itself (minus one pair
        of wrapping quotes).

    Notes
    -----
    Object literals are tried as strict JSON first and then again after
    rewriting single quotes to double quotes. When both attempts fail, the
    stripped literal text is returned as a string.
    """
    text = raw.strip()
    keywords: dict[str, PropValue] = {
        "true": True,
        "false": False,
        "null": None,
        "undefined": UNDEFINED,
    }
    if text in keywords:
        return keywords[text]

    number = NUMBER_PATTERN.fullmatch(text)
    if number:
        return float(text) if number.group(1) else int(text)

    if text.startswith("[") and text.endswith("]"):
        ok, value = _loads(text)
        return value if ok else text

    if text.startswith("{") and text.endswith("}"):
        for candidate in (text, text.replace("'", '"')):
            ok, value = _loads(candidate)
            if ok:
                return value
        return text

    if len(text) >= 2 and text[0] == text[-1] and text[0] in {'"', "'"}:
        return text[1:-1]
    return text


__all__ = [
    "DECLARABLE_KINDS",
    "UNDEFINED",
    "PropKind",
    "PropValue",
    "PropertyBag",
    "classify",
    "is_absent",
    "matches_kind",
    "parse_literal",
]

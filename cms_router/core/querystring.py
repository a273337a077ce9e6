"""Query-string normalization.

Parses a raw query string into a nested mapping following the usual
bracket conventions, coercing scalar values on the way:

    depth=2&draft=false&where[title][equals]=Hello

becomes:

    {"depth": 2, "draft": False, "where": {"title": {"equals": "Hello"}}}

Nesting rules:
    a[b][c]=1        -> {"a": {"b": {"c": 1}}}
    a[]=1&a[]=2      -> {"a": [1, 2]}
    a[1]=y&a[0]=x    -> {"a": ["x", "y"]}  (indices up to ARRAY_LIMIT)
    a=1&a=2          -> {"a": [1, 2]}

Bracket segments beyond MAX_DEPTH are kept as one literal trailing key.
"""

import re
from typing import Any, TypeAlias
from urllib.parse import parse_qsl

MAX_DEPTH = 5
ARRAY_LIMIT = 20

_INTEGER_RE = re.compile(r"[+-]?\d+")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")

QueryValue: TypeAlias = str | int | float | bool | list[Any] | dict[str, Any]


def coerce_scalar(value: str) -> str | int | float | bool:
    """Coerce a decoded query value.

    Numeric-looking strings become numbers (integers too long to convert
    become floats, possibly infinite), "true"/"false" become booleans,
    everything else (including the empty string) is returned unchanged.

    Args:
        value: Percent-decoded query value.

    Returns:
        The coerced value.

    Example:
        >>> coerce_scalar("10"), coerce_scalar("1.5"), coerce_scalar("true")
        (10, 1.5, True)
    """
    if _INTEGER_RE.fullmatch(value):
        try:
            return int(value)
        except ValueError:
            # Beyond the interpreter's integer digit limit
            return float(value)
    if _NUMBER_RE.fullmatch(value):
        return float(value)
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def split_key(key: str) -> list[str]:
    """Split a bracketed key into its path segments.

    Args:
        key: Decoded query key, e.g. "where[title][equals]".

    Returns:
        List of segments, e.g. ["where", "title", "equals"]. An empty
        segment ("a[]") means append.
    """
    bracket = key.find("[")
    if bracket <= 0:
        return [key]

    segments = [key[:bracket]]
    rest = key[bracket:]
    pos = 0
    while len(segments) - 1 < MAX_DEPTH:
        match = _SEGMENT_RE.match(rest, pos)
        if match is None:
            break
        segments.append(match.group(1))
        pos = match.end()

    if pos < len(rest):
        segments.append(rest[pos:])
    return segments


def parse_query(query_string: str) -> dict[str, QueryValue]:
    """Parse and normalize a raw query string.

    Args:
        query_string: Query string without the leading "?".

    Returns:
        Nested mapping of normalized values. Empty input yields {}.
    """
    root: dict[str, Any] = {}
    for raw_key, raw_value in parse_qsl(query_string, keep_blank_values=True):
        if not raw_key:
            continue
        _assign(root, split_key(raw_key), coerce_scalar(raw_value))

    return {key: _compact(value) for key, value in root.items()}


def _assign(target: dict[str, Any], segments: list[str], value: Any) -> None:
    key = segments[0]
    if len(segments) == 1:
        _merge(target, key, value)
        return

    child = target.get(key)
    if segments[1] == "":
        if not isinstance(child, list):
            child = [] if child is None else [child]
            target[key] = child
        if len(segments) == 2:
            child.append(value)
        else:
            element: dict[str, Any] = {}
            child.append(element)
            _assign(element, segments[2:], value)
        return

    if isinstance(child, list):
        child = {str(index): item for index, item in enumerate(child)}
    elif child is not None and not isinstance(child, dict):
        child = {"0": child}
    elif child is None:
        child = {}
    target[key] = child
    _assign(child, segments[1:], value)


def _merge(target: dict[str, Any], key: str, value: Any) -> None:
    if key not in target:
        target[key] = value
    elif isinstance(target[key], list):
        target[key].append(value)
    else:
        target[key] = [target[key], value]


def _compact(node: Any) -> Any:
    """Turn index-keyed mappings into lists, recursively."""
    if isinstance(node, list):
        return [_compact(item) for item in node]
    if not isinstance(node, dict):
        return node

    compacted = {key: _compact(value) for key, value in node.items()}
    if compacted and all(_is_array_index(key) for key in compacted):
        return [compacted[key] for key in sorted(compacted, key=int)]
    return compacted


def _is_array_index(key: str) -> bool:
    return key.isascii() and key.isdigit() and int(key) <= ARRAY_LIMIT

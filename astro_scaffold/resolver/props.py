"""Parser for the compact props mini-language used by component generators.

A props specification is a comma separated list of ``name[?]:type`` pairs::

    title:string, count?:number, tags:Array<string>, onClick:() => void

Types are TypeScript type expressions and may themselves contain commas,
colons, brackets and quoted literals, so the input is scanned with a small
state machine instead of being split on ``,`` and ``:``.
"""

from __future__ import annotations

from typing import NamedTuple

from ..errors import PropsParseError
from .models import PropDefinition

_OPENERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
_CLOSERS = {closer: opener for opener, closer in _OPENERS.items()}
_QUOTES = frozenset("'\"`")


class EmittedProps(NamedTuple):
    """TypeScript interface and ``Astro.props`` destructuring for a props list."""
    interface: str
    destructuring: str


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


class _Unbalanced(Exception):
    """Internal signal raised by the scanner; converted to PropsParseError."""


def _top_level_indices(text: str, target: str) -> list[int]:
    """Return indices of *target* that sit outside brackets and quotes.

    Raises:
        _Unbalanced: On a mismatched closer, an unclosed bracket or an
            unterminated quote.
    """
    stack: list[str] = []
    quote: str | None = None
    escaped = False
    found: list[int] = []

    for index, char in enumerate(text):
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            stack.append(char)
        elif char in _CLOSERS:
            # "=>" is an arrow, not the end of a generic
            if char == ">" and index > 0 and text[index - 1] == "=":
                continue
            if not stack or stack[-1] != _CLOSERS[char]:
                raise _Unbalanced(f"unexpected '{char}'")
            stack.pop()
        elif char == target and not stack:
            found.append(index)

    if quote is not None:
        raise _Unbalanced(f"unterminated {quote} quote")
    if stack:
        raise _Unbalanced(f"unclosed '{stack[-1]}'")
    return found


def _split_at(text: str, indices: list[int]) -> list[str]:
    parts: list[str] = []
    start = 0
    for index in indices:
        parts.append(text[start:index])
        start = index + 1
    parts.append(text[start:])
    return parts


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_props_string(spec: str | None) -> list[PropDefinition]:
    """Parse a props specification into an ordered list of definitions.

    Examples::

        parse_props_string("title:string,count?:number")
        -> [PropDefinition(name="title", type="string"),
            PropDefinition(name="count", type="number", optional=True)]

        parse_props_string("items:Array<{id:number,name:string}>")
        -> [PropDefinition(name="items", type="Array<{id:number,name:string}>")]

    Raises:
        PropsParseError: When a segment has no top-level colon, an empty name
            or type, or unbalanced brackets or quotes.
    """
    if spec is None or not spec.strip():
        return []

    try:
        commas = _top_level_indices(spec, ",")
    except _Unbalanced as exc:
        raise PropsParseError(spec.strip(), str(exc)) from None

    props: list[PropDefinition] = []
    for segment in _split_at(spec, commas):
        if not segment.strip():
            continue
        props.append(_parse_segment(segment.strip()))
    return props


def _parse_segment(segment: str) -> PropDefinition:
    colons = _top_level_indices(segment, ":")
    if not colons:
        raise PropsParseError(segment, "missing ':' between name and type")

    name = segment[: colons[0]].strip()
    prop_type = segment[colons[0] + 1 :].strip()

    optional = False
    if name.endswith("?"):
        optional = True
        name = name[:-1].rstrip()
    if prop_type.endswith("?"):
        optional = True
        prop_type = prop_type[:-1].rstrip()

    if not name:
        raise PropsParseError(segment, "empty prop name")
    if not prop_type:
        raise PropsParseError(segment, "empty prop type")
    return PropDefinition(name=name, type=prop_type, optional=optional)


def emit_props_interface(
    props: list[PropDefinition], interface_name: str = "Props"
) -> EmittedProps:
    """Render *props* as a TypeScript interface plus an ``Astro.props`` destructuring.

    An empty list renders as two empty strings so templates can skip the block.
    """
    if not props:
        return EmittedProps("", "")

    lines = [f"interface {interface_name} {{"]
    for prop in props:
        marker = "?" if prop.optional else ""
        lines.append(f"  {prop.name}{marker}: {prop.type};")
    lines.append("}")

    names = ", ".join(prop.name for prop in props)
    return EmittedProps("\n".join(lines), f"const {{ {names} }} = Astro.props;")

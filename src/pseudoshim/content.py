"""Interpretation of CSS ``content`` declarations.

A declaration is parsed once into a ``ContentSpec`` when the stylesheet is
read. Resolution to text happens later, per target node, because attribute
references depend on the node and counters depend on where the node sits
among its siblings. Counters therefore resolve to a placeholder that the
injector fills in once it knows the counter value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Union

from .counters import format_counter

# Private-use delimiters keep placeholders from colliding with document text.
_PLACEHOLDER_OPEN = "\ue000"
_PLACEHOLDER_CLOSE = "\ue001"
_PLACEHOLDER_RE = re.compile(
    f"{_PLACEHOLDER_OPEN}counter:([a-z-]+){_PLACEHOLDER_CLOSE}"
)

_CONTENT_TOKEN_RE = re.compile(
    r"""
    (?P<string>"(?:\\.|[^"\\])*"?|'(?:\\.|[^'\\])*'?)
    | (?P<function>(?P<name>[a-zA-Z-]+)\s*\((?P<arguments>[^)]*)\)?)
    | (?P<word>[^\s"'()]+)
    """,
    re.VERBOSE | re.DOTALL,
)
_ESCAPE_RE = re.compile(r"\\(?:([0-9a-fA-F]{1,6})[ \t\n]?|(\n)|(.))", re.DOTALL)
_EMPTY_KEYWORDS = frozenset({"none", "normal"})
_COUNTER_FUNCTIONS = frozenset({"counter", "counters"})
_COUNTER_STYLE_RE = re.compile(r"[a-z-]+")
_TRAILING_IMPORTANT_RE = re.compile(r"!\s*important\s*$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class LiteralContent:
    text: str


@dataclass(frozen=True, slots=True)
class CounterContent:
    name: str
    style: str = "decimal"


@dataclass(frozen=True, slots=True)
class AttributeContent:
    name: str


@dataclass(frozen=True, slots=True)
class EmptyContent:
    pass


@dataclass(frozen=True, slots=True)
class ContentSequence:
    """Several content values rendered one after the other."""

    parts: tuple[ContentSpec, ...]


ContentSpec = Union[
    LiteralContent, CounterContent, AttributeContent, EmptyContent, ContentSequence
]
AttributeLookup = Callable[[str], Union[str, None]]


def parse_content(value: str) -> ContentSpec:
    """Parse the value of a ``content`` declaration."""

    trimmed = _TRAILING_IMPORTANT_RE.sub("", value).strip()
    if not trimmed or trimmed.lower() in _EMPTY_KEYWORDS:
        return EmptyContent()

    parts: list[ContentSpec] = []
    for match in _CONTENT_TOKEN_RE.finditer(trimmed):
        part = _parse_token(match)
        if part is not None:
            parts.append(part)

    if not parts:
        return EmptyContent()
    if len(parts) == 1:
        return parts[0]
    return ContentSequence(tuple(parts))


def _parse_token(match: re.Match[str]) -> ContentSpec | None:
    if match.group("string") is not None:
        text = unescape_string(match.group("string"))
        return LiteralContent(text) if text else None

    if match.group("function") is not None:
        name = match.group("name").lower()
        arguments = [part.strip() for part in match.group("arguments").split(",")]
        if name in _COUNTER_FUNCTIONS and arguments[0]:
            # counters(name, separator[, style]) keeps only the innermost level.
            style_index = 2 if name == "counters" else 1
            style = (
                arguments[style_index]
                if len(arguments) > style_index and arguments[style_index]
                else "decimal"
            )
            style = style.lower()
            if not _COUNTER_STYLE_RE.fullmatch(style):
                style = "decimal"
            return CounterContent(name=arguments[0], style=style)
        if name == "attr" and arguments[0]:
            # attr(name type, fallback) is reduced to the attribute name.
            return AttributeContent(name=arguments[0].split()[0])
        return LiteralContent(match.group("function"))

    word = match.group("word")
    if word.lower() in _EMPTY_KEYWORDS:
        return None
    return LiteralContent(word)


def unescape_string(token: str) -> str:
    """Strip one layer of matching quotes and decode CSS escapes."""

    if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"'":
        inner = token[1:-1]
    elif token[:1] in "\"'":
        inner = token[1:]
    else:
        inner = token
    return _ESCAPE_RE.sub(_decode_escape, inner)


def _decode_escape(match: re.Match[str]) -> str:
    hex_digits, newline, char = match.groups()
    if hex_digits:
        codepoint = int(hex_digits, 16)
        if codepoint == 0 or codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
            return "\ufffd"
        return chr(codepoint)
    if newline:
        return ""
    return char


def resolve_content(spec: ContentSpec, lookup_attribute: AttributeLookup | None = None) -> str:
    """Resolve a content value for one node, leaving counters as placeholders."""

    if isinstance(spec, LiteralContent):
        return spec.text
    if isinstance(spec, AttributeContent):
        if lookup_attribute is None:
            return ""
        return lookup_attribute(spec.name) or ""
    if isinstance(spec, CounterContent):
        return counter_placeholder(spec.style)
    if isinstance(spec, ContentSequence):
        return "".join(resolve_content(part, lookup_attribute) for part in spec.parts)
    return ""


def uses_counter(spec: ContentSpec) -> bool:
    """Return True when resolving *spec* needs a counter value."""

    if isinstance(spec, CounterContent):
        return True
    if isinstance(spec, ContentSequence):
        return any(uses_counter(part) for part in spec.parts)
    return False


def counter_placeholder(style: str = "decimal") -> str:
    return f"{_PLACEHOLDER_OPEN}counter:{style}{_PLACEHOLDER_CLOSE}"


def fill_counters(text: str, value: int) -> str:
    """Replace counter placeholders in resolved content with *value*."""

    return _PLACEHOLDER_RE.sub(lambda match: format_counter(value, match.group(1)), text)

"""Structural scanning of theme stylesheets.

The scanner walks CSS text one character at a time and keeps track of:
1. Brace depth, so nested blocks are skipped or descended into as a whole.
2. String literals, whose braces and semicolons carry no structure.
3. Comments, which never start a rule prelude.

It does not interpret selectors or declarations. Callers receive the raw
prelude and body of every qualified rule along with the exact span the rule
occupies in the source, which is what both rule extraction and stylesheet
sanitizing need.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class CssBlock:
    """A qualified rule found in a stylesheet."""

    prelude: str
    body: str
    start: int
    end: int


def iter_blocks(css: str) -> Iterator[CssBlock]:
    """Yield qualified rules in source order, including those nested in at-rules."""

    yield from _scan(css, 0, len(css))


def _scan(css: str, position: int, stop: int) -> Iterator[CssBlock]:
    prelude_start: int | None = None
    index = position
    while index < stop:
        char = css[index]
        if css.startswith("/*", index):
            index = _skip_comment(css, index, stop)
            continue
        if char in "\"'":
            if prelude_start is None:
                prelude_start = index
            index = _skip_string(css, index, stop)
            continue
        if char == "{":
            close = _find_block_end(css, index + 1, stop)
            if close == -1:
                # Unbalanced braces: nothing after this point is trustworthy.
                return
            start = index if prelude_start is None else prelude_start
            prelude = strip_comments(css[start:index]).strip()
            if prelude.startswith("@"):
                yield from _scan(css, index + 1, close)
            else:
                yield CssBlock(
                    prelude=prelude,
                    body=css[index + 1 : close],
                    start=start,
                    end=close + 1,
                )
            prelude_start = None
            index = close + 1
            continue
        if char in ";}":
            # End of an at-statement such as @import, or a stray closing brace.
            prelude_start = None
        elif prelude_start is None and not char.isspace():
            prelude_start = index
        index += 1


def _find_block_end(css: str, index: int, stop: int) -> int:
    """Return the index of the brace closing the block opened before *index*."""

    depth = 1
    while index < stop:
        if css.startswith("/*", index):
            index = _skip_comment(css, index, stop)
            continue
        char = css[index]
        if char in "\"'":
            index = _skip_string(css, index, stop)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


def _skip_comment(css: str, index: int, stop: int) -> int:
    end = css.find("*/", index + 2, stop)
    return stop if end == -1 else end + 2


def _skip_string(css: str, index: int, stop: int) -> int:
    quote = css[index]
    index += 1
    while index < stop:
        char = css[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        if char == "\n":
            # Unterminated strings end at the line break.
            return index
        index += 1
    return stop


def split_top_level(text: str, separator: str) -> list[str]:
    """Split *text* on *separator* outside strings, comments and parentheses."""

    parts: list[str] = []
    depth = 0
    current_start = 0
    index = 0
    length = len(text)
    while index < length:
        if text.startswith("/*", index):
            index = _skip_comment(text, index, length)
            continue
        char = text[index]
        if char in "\"'":
            index = _skip_string(text, index, length)
            continue
        if char in "([":
            depth += 1
        elif char in ")]" and depth > 0:
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[current_start:index])
            current_start = index + 1
        index += 1
    parts.append(text[current_start:])
    return parts


def strip_comments(text: str) -> str:
    """Remove CSS comments, leaving comment-like text inside strings alone."""

    if "/*" not in text:
        return text

    pieces: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        if text.startswith("/*", index):
            index = _skip_comment(text, index, length)
            continue
        char = text[index]
        if char in "\"'":
            end = _skip_string(text, index, length)
            pieces.append(text[index:end])
            index = end
            continue
        pieces.append(char)
        index += 1
    return "".join(pieces)

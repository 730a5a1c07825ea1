"""Ordered-list counter bookkeeping for emulated pseudo-elements."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate, islice
from typing import Hashable, Iterable

_ROMAN_NUMERALS = (
    (1000, "m"),
    (900, "cm"),
    (500, "d"),
    (400, "cd"),
    (100, "c"),
    (90, "xc"),
    (50, "l"),
    (40, "xl"),
    (10, "x"),
    (9, "ix"),
    (5, "v"),
    (4, "iv"),
    (1, "i"),
)
_LATIN_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
_GREEK_ALPHABET = "αβγδεζηθικλμνξοπρστυφχψω"

_NO_PARENT = object()


@dataclass(frozen=True, slots=True)
class CounterState:
    """Fold state: the parent of the last counted node and its counter value."""

    last_parent: object = _NO_PARENT
    value: int = 0


def advance(state: CounterState, parent_key: Hashable | None) -> CounterState:
    """Count one more node, restarting at 1 whenever the parent changes."""

    if parent_key is None or parent_key != state.last_parent:
        return CounterState(last_parent=parent_key, value=1)
    return CounterState(last_parent=parent_key, value=state.value + 1)


def count_by_parent(parent_keys: Iterable[Hashable | None]) -> list[int]:
    """Return the counter value for each node, given its parent key in document order.

    A ``None`` key marks a node without a parent; such nodes always start a new
    sequence.
    """

    states = accumulate(parent_keys, advance, initial=CounterState())
    return [state.value for state in islice(states, 1, None)]


def format_counter(value: int, style: str = "decimal") -> str:
    """Render a counter value using a CSS ``list-style-type`` keyword."""

    style = style.strip().lower()
    if style == "decimal-leading-zero":
        return f"{value:02d}" if value >= 0 else f"-{-value:02d}"
    if value <= 0:
        return str(value)
    if style in ("lower-roman", "upper-roman") and value < 4000:
        roman = _to_roman(value)
        return roman.upper() if style == "upper-roman" else roman
    if style in ("lower-alpha", "lower-latin"):
        return _to_alphabetic(value, _LATIN_ALPHABET)
    if style in ("upper-alpha", "upper-latin"):
        return _to_alphabetic(value, _LATIN_ALPHABET).upper()
    if style == "lower-greek":
        return _to_alphabetic(value, _GREEK_ALPHABET)
    return str(value)


def _to_roman(value: int) -> str:
    parts: list[str] = []
    for amount, numeral in _ROMAN_NUMERALS:
        count, value = divmod(value, amount)
        parts.append(numeral * count)
    return "".join(parts)


def _to_alphabetic(value: int, alphabet: str) -> str:
    # Bijective numbering: a, b, ..., z, aa, ab, ...
    base = len(alphabet)
    letters: list[str] = []
    while value > 0:
        value, remainder = divmod(value - 1, base)
        letters.append(alphabet[remainder])
    return "".join(reversed(letters))

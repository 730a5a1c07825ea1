"""Inline style parsing and the style sets given to injected markers.

Style updates are computed as new mappings from the existing styles and the
required overrides, and only then written back to a node.
"""

from __future__ import annotations

import re
from typing import Mapping

from .scanner import split_top_level, strip_comments

_IMPORTANT_RE = re.compile(r"!\s*important", re.IGNORECASE)
_STATIC_POSITIONS = frozenset({"", "static"})

BEFORE_OFFSETS = {"left": "0", "top": "0"}
AFTER_OFFSETS = {"right": "0", "top": "0"}


def parse_declarations(text: str | None) -> dict[str, str]:
    """Parse ``prop: value; ...`` into an ordered mapping.

    Property names are lower-cased, values are trimmed and ``!important``
    markers are dropped. Declarations without a property or a value are
    ignored; later duplicates win.
    """

    declarations: dict[str, str] = {}
    if not text:
        return declarations

    for declaration in split_top_level(strip_comments(text), ";"):
        prop, separator, value = declaration.partition(":")
        if not separator:
            continue
        prop = prop.strip().lower()
        value = normalize_value(value)
        if prop and value:
            declarations[prop] = value
    return declarations


def normalize_value(value: str) -> str:
    return _IMPORTANT_RE.sub("", value).strip()


def serialize_style(styles: Mapping[str, str]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in styles.items())


def append_declarations(style: str | None, additions: Mapping[str, str]) -> str:
    """Append *additions* to an inline style, keeping its text as written."""

    added = serialize_style(additions)
    text = (style or "").rstrip()
    if not added:
        return text
    if not text:
        return added
    if not text.endswith(";"):
        text += ";"
    return f"{text} {added}"


def merge_styles(
    existing: Mapping[str, str],
    overrides: Mapping[str, str],
    *,
    only_if_absent: bool = False,
) -> dict[str, str]:
    """Return *existing* updated with *overrides*, without mutating either."""

    merged = dict(existing)
    for prop, value in overrides.items():
        if only_if_absent and merged.get(prop):
            continue
        merged[prop] = value
    return merged


def with_position_context(existing: Mapping[str, str]) -> dict[str, str]:
    """Give an element a positioning context unless it already has one."""

    position = existing.get("position", "").strip().lower()
    if position not in _STATIC_POSITIONS:
        return dict(existing)
    return merge_styles(existing, {"position": "relative"})


def marker_styles(rule_styles: Mapping[str, str], kind: str) -> dict[str, str]:
    """Compute the inline style of a marker standing in for a pseudo-element.

    Markers are always absolutely positioned and ignore pointer events. Each
    axis without an explicit offset falls back to the top-left corner for
    ``before`` and the top-right corner for ``after``.
    """

    styles = merge_styles(
        rule_styles, {"position": "absolute", "pointer-events": "none"}
    )
    defaults = BEFORE_OFFSETS if kind == "before" else AFTER_OFFSETS
    horizontal = {prop: value for prop, value in defaults.items() if prop != "top"}
    if not (styles.get("left") or styles.get("right")):
        styles = merge_styles(styles, horizontal)
    if not (styles.get("top") or styles.get("bottom")):
        styles = merge_styles(styles, {"top": defaults["top"]})
    return styles

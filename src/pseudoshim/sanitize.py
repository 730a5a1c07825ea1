"""Removal of pseudo-element rules from theme stylesheets."""

from __future__ import annotations

from .extract import iter_pseudo_blocks


def remove_pseudo_rules(css: str | None) -> str:
    """Drop every pseudo-element block, keeping all other text as written."""

    if not css:
        return ""

    pieces: list[str] = []
    cursor = 0
    for block, _ in iter_pseudo_blocks(css):
        pieces.append(css[cursor : block.start])
        cursor = block.end
    if cursor == 0:
        return css
    pieces.append(css[cursor:])
    return "".join(pieces)

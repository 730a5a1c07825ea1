"""BeautifulSoup-backed document tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Mapping

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from . import MARKER_ATTRIBUTE, SelectorError
from ..styles import append_declarations, parse_declarations, serialize_style

if TYPE_CHECKING:
    from ..options import PseudoShimOptions


class Tree:
    """Document tree over an HTML fragment parsed with ``html.parser``."""

    def __init__(self, html: str, options: PseudoShimOptions) -> None:
        self._soup = BeautifulSoup(html, "html.parser")
        self._options = options

    def select(self, selector: str) -> list[Tag]:
        try:
            found = self._soup.select(selector)
        except (SelectorSyntaxError, NotImplementedError) as exc:
            raise SelectorError(f"Cannot evaluate selector '{selector}': {exc}") from exc
        return [element for element in found if not self._is_marker(element)]

    def find_by_tag(self, tag: str) -> list[Tag]:
        return [
            element
            for element in self._soup.find_all(tag)
            if not self._is_marker(element)
        ]

    def parent_key(self, node: Tag) -> Hashable | None:
        # Tag equality is structural, so identical-looking parents would collide.
        if node.parent is None:
            return None
        return id(node.parent)

    def get_attribute(self, node: Tag, name: str) -> str | None:
        value = node.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def get_style(self, node: Tag) -> dict[str, str]:
        return parse_declarations(self.get_attribute(node, "style"))

    def add_styles(self, node: Tag, styles: Mapping[str, str]) -> None:
        node["style"] = append_declarations(self.get_attribute(node, "style"), styles)

    def create_marker(self, kind: str, text: str, styles: Mapping[str, str]) -> Tag:
        marker = self._soup.new_tag(self._options.marker_tag)
        marker["class"] = self._options.marker_class(kind)
        marker["aria-hidden"] = "true"
        marker[MARKER_ATTRIBUTE] = kind
        marker["style"] = serialize_style(styles)
        if text:
            marker.string = text
        return marker

    def prepend(self, node: Tag, child: Tag) -> None:
        node.insert(0, child)

    def append(self, node: Tag, child: Tag) -> None:
        node.append(child)

    def remove_markers(self) -> int:
        markers = self._soup.find_all(attrs={MARKER_ATTRIBUTE: True})
        for marker in markers:
            marker.decompose()
        return len(markers)

    def serialize(self) -> str:
        return str(self._soup)

    def _is_marker(self, element: Tag) -> bool:
        return element.has_attr(MARKER_ATTRIBUTE)

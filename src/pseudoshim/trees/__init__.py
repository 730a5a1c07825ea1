"""Document tree backends and their loader."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any, Hashable, Mapping, Protocol

if TYPE_CHECKING:
    from ..options import PseudoShimOptions

DEFAULT_BACKEND = "soup"
MARKER_ATTRIBUTE = "data-pseudo-element"


class SelectorError(ValueError):
    """Raised by a backend when it cannot evaluate a selector."""


class DocumentTree(Protocol):
    """Mutable HTML tree interface needed by the injector."""

    def select(self, selector: str) -> list[Any]:
        """Return matching elements in document order, markers excluded.

        Raises ``SelectorError`` when the selector cannot be evaluated.
        """
        ...

    def find_by_tag(self, tag: str) -> list[Any]: ...

    def parent_key(self, node: Any) -> Hashable | None: ...

    def get_attribute(self, node: Any, name: str) -> str | None: ...

    def get_style(self, node: Any) -> dict[str, str]: ...

    def add_styles(self, node: Any, styles: Mapping[str, str]) -> None:
        """Append declarations to the inline style, leaving existing text as is."""
        ...

    def create_marker(self, kind: str, text: str, styles: Mapping[str, str]) -> Any: ...

    def prepend(self, node: Any, child: Any) -> None: ...

    def append(self, node: Any, child: Any) -> None: ...

    def remove_markers(self) -> int: ...

    def serialize(self) -> str: ...


def load_tree(name: str, html: str, options: PseudoShimOptions) -> DocumentTree:
    """Parse *html* with the named tree backend."""

    module_name = name or DEFAULT_BACKEND
    module_path = f"{__name__}.{module_name}"
    module = import_module(module_path)
    tree_cls = getattr(module, "Tree", None)
    if tree_cls is None:
        raise ImportError(f"Tree backend '{module_name}' missing Tree class")
    return tree_cls(html, options)

"""Extraction of ``::before``/``::after`` rules from theme stylesheets.

Only rule blocks whose selector ends in a pseudo-element are of interest.
Each such block becomes one ``PseudoElementRule`` per pseudo-element kind
named in its selector list, holding:
1. The selector of the element the pseudo-element belongs to, with the
   preview container class removed so it can be queried inside a fragment.
2. Whether the pseudo-element comes before or after the element's content.
3. The parsed ``content`` value.
4. The remaining declarations, in source order.

Blocks that cannot be turned into a rule are skipped without error, and so
are selectors whose subject is the universal selector.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .content import ContentSpec, LiteralContent, parse_content
from .options import PseudoShimOptions
from .scanner import CssBlock, iter_blocks, split_top_level, strip_comments
from .styles import normalize_value

_PSEUDO_SUFFIX_RE = re.compile(r"::?(before|after)\s*$", re.IGNORECASE)
_LEADING_COMBINATOR_RE = re.compile(r"^[>+~]\s*")
_COMPOUND_SPLIT_RE = re.compile(r"\s*[\s>+~]\s*")
_UNIVERSAL_COMPOUND_RE = re.compile(r"\*?(?::[^.#\[]*)?")


class PseudoKind(str, Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True, slots=True)
class PseudoElementRule:
    """One pseudo-element rule, ready to be injected."""

    selector: str
    kind: PseudoKind
    content: ContentSpec = LiteralContent("")
    styles: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class PseudoSelector:
    """The owner selectors of one pseudo-element kind in a rule prelude."""

    kind: PseudoKind
    selectors: tuple[str, ...]


def match_pseudo_selector(prelude: str) -> tuple[PseudoSelector, ...]:
    """Group the owner selectors of a rule prelude by pseudo-element kind.

    A prelude qualifies when it ends in a pseudo-element; otherwise the result
    is empty. In a selector list each component ending in ``::before`` or
    ``::after`` contributes its prefix to the group of that kind. Groups come
    in order of first appearance.
    """

    prelude = strip_comments(prelude).strip()
    if _PSEUDO_SUFFIX_RE.search(prelude) is None:
        return ()

    grouped: dict[PseudoKind, list[str]] = {}
    for component in split_top_level(prelude, ","):
        component_match = _PSEUDO_SUFFIX_RE.search(component)
        if component_match is None:
            continue
        kind = PseudoKind(component_match.group(1).lower())
        grouped.setdefault(kind, []).append(component[: component_match.start()].strip())
    return tuple(
        PseudoSelector(kind=kind, selectors=tuple(selectors))
        for kind, selectors in grouped.items()
    )


def iter_pseudo_blocks(
    css: str,
) -> Iterable[tuple[CssBlock, tuple[PseudoSelector, ...]]]:
    """Yield every pseudo-element block of *css* in source order."""

    for block in iter_blocks(css):
        groups = match_pseudo_selector(block.prelude)
        if groups:
            yield block, groups


def extract_pseudo_rules(
    css: str | None,
    options: PseudoShimOptions | None = None,
) -> list[PseudoElementRule]:
    """Collect pseudo-element rules from a stylesheet, in source order."""

    if not css:
        return []

    options = options or PseudoShimOptions()
    rules: list[PseudoElementRule] = []
    for block, groups in iter_pseudo_blocks(css):
        content, styles = _parse_body(block.body)
        for pseudo in groups:
            selectors = _owner_selectors(pseudo.selectors, options.container_classes)
            if not selectors:
                continue
            rules.append(
                PseudoElementRule(
                    selector=", ".join(selectors),
                    kind=pseudo.kind,
                    content=content,
                    styles=MappingProxyType(dict(styles)),
                )
            )
    return rules


def _owner_selectors(
    selectors: Iterable[str], container_classes: tuple[str, ...]
) -> list[str]:
    cleaned = (clean_selector(selector, container_classes) for selector in selectors)
    return [selector for selector in cleaned if selector and not is_universal(selector)]


def _parse_body(body: str) -> tuple[ContentSpec, dict[str, str]]:
    content: ContentSpec = LiteralContent("")
    styles: dict[str, str] = {}
    for declaration in split_top_level(strip_comments(body), ";"):
        prop, separator, value = declaration.partition(":")
        if not separator:
            continue
        prop = prop.strip().lower()
        value = value.strip()
        if not prop or not value:
            continue
        if prop == "content":
            content = parse_content(value)
        else:
            normalized = normalize_value(value)
            if normalized:
                styles[prop] = normalized
    return content, styles


def is_universal(selector: str) -> bool:
    """Tell whether the last compound of *selector* may match any element.

    That is the case for ``*`` and for compounds made only of pseudo-classes,
    such as ``:first-child`` or ``*:hover``. A type, class, id or attribute
    narrows the compound.
    """

    compound = _COMPOUND_SPLIT_RE.split(selector.strip())[-1]
    return _UNIVERSAL_COMPOUND_RE.fullmatch(compound) is not None


def clean_selector(selector: str, container_classes: Iterable[str]) -> str:
    """Remove preview container compounds such as ``article.preview-content``."""

    pattern = _container_pattern(tuple(container_classes))
    if pattern is not None:
        selector = pattern.sub(" ", selector)
    selector = " ".join(selector.split())
    return _LEADING_COMBINATOR_RE.sub("", selector)


def _container_pattern(container_classes: tuple[str, ...]) -> re.Pattern[str] | None:
    if not container_classes:
        return None
    names = "|".join(re.escape(name) for name in container_classes)
    return re.compile(
        rf"(?<![\w.#:-])(?:[a-zA-Z][\w-]*)?\.(?:{names})(?![\w-])"
    )

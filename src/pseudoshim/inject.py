"""Injection of real elements standing in for pseudo-elements."""

from __future__ import annotations

import re
import warnings
from itertools import repeat
from typing import Any, Iterable, Sequence

from .content import fill_counters, resolve_content, uses_counter
from .counters import count_by_parent
from .extract import PseudoElementRule, PseudoKind
from .options import PseudoShimOptions
from .styles import marker_styles, with_position_context
from .trees import DocumentTree, SelectorError, load_tree

_LEADING_TAG_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9]*)")
_COMPOUND_SEPARATOR_RE = re.compile(r"[\s>+~,]+")


def inject_pseudo_elements(
    html: str,
    rules: Sequence[PseudoElementRule],
    options: PseudoShimOptions | None = None,
) -> str:
    """Insert one marker element per rule and matched element.

    Markers left by an earlier pass are removed first, so running the same
    rules over already converted HTML gives the same result. Without rules the
    HTML is returned as given.
    """

    if not rules:
        return html

    options = options or PseudoShimOptions()
    tree = load_tree(options.tree_backend, html, options)
    tree.remove_markers()
    for rule in rules:
        targets = match_targets(tree, rule)
        if not targets:
            continue
        for node, counter in zip(targets, _counter_values(tree, rule, targets)):
            _inject_marker(tree, node, rule, counter)
    return tree.serialize()


def match_targets(tree: DocumentTree, rule: PseudoElementRule) -> list[Any]:
    """Find the elements a rule applies to.

    Selectors the tree cannot evaluate fall back to every element with the
    tag of the selector's last compound. That fallback ignores ancestor
    constraints and may match more elements than the stylesheet intended.
    """

    try:
        return tree.select(rule.selector)
    except SelectorError:
        tag = fallback_tag(rule.selector)
        if tag is None:
            return []
        warnings.warn(
            f"Selector '{rule.selector}' could not be evaluated; "
            f"applying its ::{rule.kind.value} rule to every <{tag}> element.",
            stacklevel=3,
        )
        return tree.find_by_tag(tag)


def fallback_tag(selector: str) -> str | None:
    """Return the tag name of the last compound of *selector*, if it has one."""

    parts = [part for part in _COMPOUND_SEPARATOR_RE.split(selector) if part]
    if not parts:
        return None
    match = _LEADING_TAG_RE.match(parts[-1])
    return match.group(1).lower() if match else None


def _counter_values(
    tree: DocumentTree,
    rule: PseudoElementRule,
    targets: Sequence[Any],
) -> Iterable[int | None]:
    if not uses_counter(rule.content):
        return repeat(None)
    return count_by_parent(tree.parent_key(node) for node in targets)


def _inject_marker(
    tree: DocumentTree,
    node: Any,
    rule: PseudoElementRule,
    counter: int | None,
) -> None:
    existing = tree.get_style(node)
    positioned = with_position_context(existing)
    additions = {
        prop: value for prop, value in positioned.items() if existing.get(prop) != value
    }
    if additions:
        tree.add_styles(node, additions)

    text = resolve_content(rule.content, lambda name: tree.get_attribute(node, name))
    if counter is not None:
        text = fill_counters(text, counter)

    marker = tree.create_marker(
        rule.kind.value, text, marker_styles(rule.styles, rule.kind.value)
    )
    if rule.kind is PseudoKind.BEFORE:
        tree.prepend(node, marker)
    else:
        tree.append(node, marker)

"""Pseudo-element conversion pipeline orchestration."""

from __future__ import annotations

from dataclasses import dataclass

from .extract import extract_pseudo_rules
from .inject import inject_pseudo_elements
from .options import PseudoShimOptions
from .sanitize import remove_pseudo_rules


@dataclass(frozen=True, slots=True)
class ProcessedDocument:
    """Converted HTML and the stylesheet that remains safe to apply."""

    html: str
    css: str


def process_pseudo_elements(
    html: str,
    css: str | None,
    options: PseudoShimOptions | None = None,
) -> ProcessedDocument:
    """Turn the pseudo-element rules of *css* into elements inside *html*."""

    if not css:
        return ProcessedDocument(html=html, css="")

    options = options or PseudoShimOptions()
    rules = extract_pseudo_rules(css, options)
    return ProcessedDocument(
        html=inject_pseudo_elements(html, rules, options),
        css=remove_pseudo_rules(css),
    )

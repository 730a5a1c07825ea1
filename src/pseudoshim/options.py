"""Configuration and command-line option parsing for pseudoshim."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

DEFAULT_TREE_BACKEND = "soup"
DEFAULT_CONTAINER_CLASSES = ("preview-content",)
STDIN_PATH = "-"


@dataclass(slots=True)
class PseudoShimOptions:
    """Engine settings plus the file locations used by the CLI."""

    container_classes: tuple[str, ...] = DEFAULT_CONTAINER_CLASSES
    tree_backend: str = DEFAULT_TREE_BACKEND
    marker_tag: str = "span"
    marker_class_prefix: str = "pseudo-"
    html_path: str = STDIN_PATH
    css_path: Path | None = None
    output_path: Path | None = None
    css_output_path: Path | None = None
    verbose: bool = False
    quiet: bool = False

    def marker_class(self, kind: str) -> str:
        """Return the class name given to markers of the given kind."""

        return f"{self.marker_class_prefix}{kind}"


def parse_cli_args(argv: Sequence[str] | None = None) -> PseudoShimOptions:
    """Parse CLI arguments into a dataclass."""

    parser = argparse.ArgumentParser(
        prog="pseudoshim",
        description=(
            "Replace ::before/::after rules of a theme stylesheet with real "
            "elements injected into an HTML fragment."
        ),
    )
    parser.add_argument(
        "--css",
        help="Theme stylesheet whose pseudo-element rules are emulated.",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write the converted HTML here instead of standard output.",
    )
    parser.add_argument(
        "--css-output",
        help="Write the stylesheet without pseudo-element rules here.",
    )
    parser.add_argument(
        "--container-class",
        action="append",
        dest="container_classes",
        metavar="NAME",
        help=(
            "Class of the preview container stripped from selectors; may be "
            'repeated (default: "preview-content").'
        ),
    )
    parser.add_argument(
        "--tree-backend",
        default=DEFAULT_TREE_BACKEND,
        help=f'Document tree implementation (default: "{DEFAULT_TREE_BACKEND}").',
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output (errors only).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Report how many rules were found and removed.",
    )
    parser.add_argument(
        "html",
        help='HTML fragment to convert; "-" reads standard input.',
    )

    args = parser.parse_args(argv)

    if args.quiet and args.verbose:
        parser.error("--quiet and --verbose cannot be combined.")

    container_classes = _normalize_classes(args.container_classes)

    return PseudoShimOptions(
        container_classes=container_classes,
        tree_backend=args.tree_backend,
        html_path=args.html,
        css_path=Path(args.css) if args.css else None,
        output_path=Path(args.output) if args.output else None,
        css_output_path=Path(args.css_output) if args.css_output else None,
        verbose=args.verbose,
        quiet=args.quiet,
    )


def _normalize_classes(values: Sequence[str] | None) -> tuple[str, ...]:
    """Accept class names with or without a leading dot."""

    if not values:
        return DEFAULT_CONTAINER_CLASSES
    names = [value.strip().lstrip(".") for value in values]
    return tuple(name for name in names if name)

"""Command-line interface for pseudoshim."""

from __future__ import annotations

import sys
import warnings
from pathlib import Path
from typing import Callable

from .extract import extract_pseudo_rules
from .options import STDIN_PATH, PseudoShimOptions, parse_cli_args
from .transform import process_pseudo_elements


def main(argv: list[str] | None = None) -> int:
    """Entry-point invoked by the `pseudoshim` console script."""

    options = parse_cli_args(argv)
    logger = _build_logger(options.quiet)
    verbose = options.verbose and not options.quiet

    try:
        html = _read_html(options.html_path)
        css = options.css_path.read_text(encoding="utf-8") if options.css_path else ""
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if verbose:
        rules = extract_pseudo_rules(css, options)
        logger(f"Extract phase: found {len(rules)} pseudo-element rule(s)")

    with warnings.catch_warnings(record=True) as caught_warnings:
        warnings.simplefilter("always")
        result = process_pseudo_elements(html, css, options)
    _log_warning_records(caught_warnings, logger)

    if verbose:
        logger(
            f"Sanitize phase: stylesheet reduced from {len(css)} "
            f"to {len(result.css)} character(s)"
        )

    try:
        _write_outputs(options, result.html, result.css)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if options.output_path is not None:
        logger(f"HTML: wrote {options.output_path}")
    if options.css_output_path is not None:
        logger(f"CSS: wrote {options.css_output_path}")
    return 0


def _read_html(path: str) -> str:
    if path == STDIN_PATH:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_outputs(options: PseudoShimOptions, html: str, css: str) -> None:
    if options.output_path is None:
        sys.stdout.write(html)
    else:
        options.output_path.parent.mkdir(parents=True, exist_ok=True)
        options.output_path.write_text(html, encoding="utf-8")

    if options.css_output_path is not None:
        options.css_output_path.parent.mkdir(parents=True, exist_ok=True)
        options.css_output_path.write_text(css, encoding="utf-8")


def _build_logger(quiet: bool) -> Callable[[str], None]:
    # Standard output may carry the converted HTML.
    def _log(message: str) -> None:
        if not quiet:
            print(message, file=sys.stderr)

    return _log


def _log_warning_records(
    records: list[warnings.WarningMessage], log: Callable[[str], None]
) -> None:
    for record in records:
        message = str(record.message)
        if message:
            log(f"Warning: {message}")

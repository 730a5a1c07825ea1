"""Test configuration that makes the src/ layout importable without installing."""

import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"

sys.path.insert(0, str(SRC))

from pseudoshim.options import PseudoShimOptions  # noqa: E402


@pytest.fixture()
def options() -> PseudoShimOptions:
    return PseudoShimOptions()

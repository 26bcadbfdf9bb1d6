from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Import the local src tree, not an installed copy of the package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _reset_verbosity():
    from hbasecheck.cli.common.output import out

    out.verbosity = 0
    yield
    out.verbosity = 0

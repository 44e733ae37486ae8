"""Pytest bootstrap for local source imports.

The ``pytest`` console script can run with a sys.path that excludes the
repository root. Ensure ``import lazydir`` resolves to the local package and
that shared test helpers under ``tests/`` are importable.
"""

from __future__ import annotations

import sys
from pathlib import Path


TESTS_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_ROOT.parent

for import_root in (str(PROJECT_ROOT), str(TESTS_ROOT)):
    if import_root not in sys.path:
        sys.path.insert(0, import_root)

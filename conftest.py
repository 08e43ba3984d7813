"""Pytest configuration for the avlg-trees test suite."""

import sys
from pathlib import Path

# ``tests`` and ``stats`` are imported as packages from the project root;
# ``src`` makes ``avlg_trees`` importable from a plain checkout.
_project_root = Path(__file__).resolve().parent
for _path in (_project_root, _project_root / "src"):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

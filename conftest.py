"""
Root conftest: makes the src/ packages importable without an install.
Shared engine fixtures live in tests/conftest.py.
"""

import sys
from pathlib import Path

# Ensure src on path
sys.path.insert(0, str(Path(__file__).parent / "src"))

"""Put the project root on sys.path for test runs.

``standup_app`` is a namespace package (no top-level ``__init__.py``) and the
launcher ``run_standup.py`` lives beside it, so a plain checkout run with
``pytest`` from the repository root, without ``pip install -e .``, would
otherwise fail to import either.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

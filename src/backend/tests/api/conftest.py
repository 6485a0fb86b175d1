import os
import sys


BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest


@pytest.fixture(autouse=True)
def _default_workshop_env(monkeypatch):
    monkeypatch.delenv("WORKSHOP_STANDARD_TAX_CODE", raising=False)

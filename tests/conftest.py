import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so tests can import `latlng.*` without installing.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from latlng.config import clear_settings_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _default_degree_settings(monkeypatch):
    for name in ("LATLNG_SETTINGS_PATH", "LATLNG_DEGREE_PLACES", "LATLNG_DEGREE_ROUNDING"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()

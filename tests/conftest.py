# tests/conftest.py
import os, sys
# put the project root (the folder that holds "eventdocs") first on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest


@pytest.fixture(autouse=True)
def anomaly_log_dir(tmp_path, monkeypatch):
    """Keep anomaly logs out of the project tree."""
    from eventdocs.services import anomalies
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(anomalies, "LOG_DIR", log_dir)
    return log_dir


@pytest.fixture(autouse=True)
def fresh_rates():
    from eventdocs.services.currency import reload_rates
    reload_rates()
    yield
    reload_rates()

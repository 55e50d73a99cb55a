from __future__ import annotations

from datetime import datetime

import pytest

from lagerboard.api import app as api_module
from lagerboard.api.app import app, configure


@pytest.fixture
def frozen_now(monkeypatch):
    """Server 'now' pinned to wednesday 2026-01-07 14:30."""
    now = datetime(2026, 1, 7, 14, 30)
    monkeypatch.setattr(api_module, "_now", lambda: now)
    return now


@pytest.fixture
def client(store, frozen_now):
    """
    Flask test client (no real server) over the seeded SQLite store.
    """
    configure(store)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client
    api_module.BACKEND.store = None

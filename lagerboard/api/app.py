# lagerboard/api/app.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask import Flask, jsonify

from lagerboard.adapters.project_store_adapter import ProjectStore
from lagerboard.api.decorators import handle_unknown_period
from lagerboard.engines.period_engine import Period, PeriodEngine
from lagerboard.utils.errors import StoreError
from lagerboard import logs

app = Flask(__name__)


class _Backend:
    """Store and period rules the routes read from; set by configure()."""

    def __init__(self):
        self.store: Optional[ProjectStore] = None
        self.periods = PeriodEngine()


BACKEND = _Backend()


def configure(store: ProjectStore, *, business_days: bool = False) -> Flask:
    BACKEND.store = store
    BACKEND.periods = PeriodEngine(business_days=business_days)
    return app


def _now() -> datetime:
    return datetime.now()


# ============================================================
# Public warehouse endpoints (no auth, read by the kiosk)
# ============================================================
@app.get("/projects/<slug>")
@handle_unknown_period
def get_projects(slug: str):
    period = Period.from_slug(slug)

    if BACKEND.store is None:
        logs.error("[API] no project store configured")
        return jsonify([]), 500

    window = BACKEND.periods.window(period, _now())
    try:
        rows = BACKEND.store.fetch(period, window)
    except StoreError as e:
        logs.error(f"[API] project query error: {e}")
        return jsonify([]), 500

    return jsonify(rows)


@app.get("/health")
def health():
    return jsonify({"ok": True})


if __name__ == "__main__":
    # python -m lagerboard.api.app
    from lagerboard.adapters.project_store_adapter import SqlProjectStore
    from lagerboard.config.app_config import AppConfig

    cfg = AppConfig.load()
    configure(SqlProjectStore.from_url(cfg.database.url, cfg.database.pool_recycle),
              business_days=cfg.api.business_days)
    app.run(host=cfg.api.host, port=cfg.api.port)

#!filepath: lagerboard/cli.py
import asyncio
import os
import sys
from datetime import date, datetime
from typing import Optional

import typer
from rich import print

from lagerboard import AppConfig, __version__, init_logging, logs
from lagerboard.engines.period_engine import Period, PeriodEngine
from lagerboard.utils.errors import UserInputError

app = typer.Typer(help="Lagerboard warehouse kiosk")


def _load(config: Optional[str]) -> AppConfig:
    cfg = AppConfig.load(config)
    init_logging(cfg.log)
    return cfg


def _parse_period(name: str) -> Period:
    for period in Period:
        if name in (period.value, period.slug):
            return period
    choices = ", ".join(p.value for p in Period)
    raise UserInputError(f"unknown period '{name}' (choose from: {choices})")


def _parse_day(day: Optional[str]) -> datetime | date:
    """
    'YYYY-MM-DD' → whole days, 'YYYY-MM-DD HH:MM' → anchored at that time,
    nothing → now.
    """
    if day is None:
        return datetime.now()
    if len(day) == 10:
        return datetime.strptime(day, "%Y-%m-%d").date()
    return datetime.strptime(day, "%Y-%m-%d %H:%M")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def window(
    period: str,
    day: Optional[str] = typer.Option(
        None, help="reference day YYYY-MM-DD or 'YYYY-MM-DD HH:MM' (default: now)"
    ),
    business_days: bool = typer.Option(False, "--business-days", help="count offsets in weekdays"),
):
    """
    Print the bounds a period query is run with.
    """
    try:
        p = _parse_period(period)
        now = _parse_day(day)
    except (UserInputError, ValueError) as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    start, end = PeriodEngine(business_days=business_days).window(p, now).bounds()
    print(f"[blue]{p.value}[/blue]: {start:%Y-%m-%d %H:%M} -> {end:%Y-%m-%d %H:%M}")


@app.command()
def serve(config: Optional[str] = typer.Option(None, help="path to a YAML config")):
    """
    Run the /projects/<period> API.
    """
    from lagerboard.adapters.project_store_adapter import SqlProjectStore
    from lagerboard.api.app import configure

    cfg = _load(config)
    store = SqlProjectStore.from_url(cfg.database.url, cfg.database.pool_recycle)
    flask_app = configure(store, business_days=cfg.api.business_days)

    print(f"[green]Serving projects on {cfg.api.host}:{cfg.api.port}[/green]")
    flask_app.run(host=cfg.api.host, port=cfg.api.port)


@app.command()
@logs.catch(msg="kiosk stopped on an unhandled error")
def kiosk(config: Optional[str] = typer.Option(None, help="path to a YAML config")):
    """
    Run the rotating warehouse display in this terminal.
    """
    cfg = _load(config)
    reload_requested = asyncio.run(_run_kiosk(cfg))

    if reload_requested:
        logs.info("[Kiosk] restarting process")
        # execv replaces the process; drain the enqueued sinks first
        logs.complete()
        os.execv(sys.executable, [sys.executable, "-m", "lagerboard.cli", *sys.argv[1:]])


async def _run_kiosk(cfg: AppConfig) -> bool:
    from lagerboard.adapters.project_query_adapter import ProjectQueryAdapter
    from lagerboard.kiosk.renderer import ConsoleRenderer
    from lagerboard.kiosk.rotation_engine import DisplayRotationEngine

    reload_requested = []

    async with ProjectQueryAdapter(cfg.kiosk.base_url, timeout=cfg.kiosk.fetch_timeout) as gateway:
        with ConsoleRenderer(cfg.kiosk.periods) as renderer:
            engine = DisplayRotationEngine(
                gateway,
                renderer,
                config=cfg.kiosk,
                on_reload=lambda: reload_requested.append(True),
            )
            logs.info(f"[Kiosk] started against {cfg.kiosk.base_url}")
            try:
                await engine.run()
            finally:
                await engine.close()

    return bool(reload_requested)


if __name__ == "__main__":
    app()

# python -m lagerboard.cli kiosk

#!filepath: lagerboard/kiosk/rotation_engine.py
from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Optional, Protocol

from lagerboard.config.kiosk_config import KioskConfig
from lagerboard.engines.pager import paginate
from lagerboard.engines.period_engine import Period
from lagerboard.kiosk.clock import Clock, SystemClock, TimerHandle
from lagerboard.kiosk.formatting import counter_text
from lagerboard.kiosk.renderer import Renderer
from lagerboard.kiosk.state import KioskState
from lagerboard.models.project import Project
from lagerboard import logs


class ProjectGateway(Protocol):
    async def fetch_period(self, period: Period) -> List[Project]:
        """Never raises for data problems; [] means "nothing to show"."""
        ...


class DisplayRotationEngine:
    """
    Drives the warehouse screen.

    Every tick:
      1. clock readout
      2. countdown -= 1
      3. countdown <= 0 → every panel flips to its next page, countdown reset
      4. data older than `stale_after` → background refresh_all()
      5. panel counters

    A watchdog fires `on_reload` once after `watchdog_interval` of uptime.

    Single-threaded: tick() and the refresh completion both run on the same
    event loop, so the shared KioskState needs no locking.
    """

    def __init__(
        self,
        gateway: ProjectGateway,
        renderer: Renderer,
        *,
        config: Optional[KioskConfig] = None,
        clock: Optional[Clock] = None,
        on_reload: Optional[Callable[[], None]] = None,
        state: Optional[KioskState] = None,
    ):
        self.cfg = config or KioskConfig()
        self.gateway = gateway
        self.renderer = renderer
        self.clock = clock or SystemClock()
        self.on_reload = on_reload
        self.state = state or KioskState.initial(self.cfg.periods, self.cfg.rotation_interval)

        self._running = False
        self._refresh_task: Optional[asyncio.Task] = None
        self._watchdog: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    # tick
    # ------------------------------------------------------------------
    def tick(self) -> Optional[asyncio.Task]:
        """
        One second of kiosk life. Returns the refresh task when this tick
        started one.
        """
        s = self.state
        self._safe_render(self.renderer.render_clock, self.clock.now())

        s.countdown -= 1
        if s.countdown <= 0:
            self.rotate()

        task = self.schedule_refresh() if self.is_stale() else None

        self._safe_render(self.renderer.render_counters, self.counters())
        return task

    def rotate(self) -> None:
        for panel in self.state.panels.values():
            panel.advance()
        self.render_all()
        self.state.countdown = self.cfg.rotation_interval

    def is_stale(self) -> bool:
        last = self.state.last_fetch
        return last is None or self.clock.monotonic() - last > self.cfg.stale_after

    def counters(self) -> Dict[Period, str]:
        s = self.state
        return {
            period: counter_text(panel.current_index, panel.page_count, s.countdown)
            for period, panel in s.panels.items()
        }

    # ------------------------------------------------------------------
    # refresh
    # ------------------------------------------------------------------
    def schedule_refresh(self) -> Optional[asyncio.Task]:
        """
        Start refresh_all() in the background unless one is in flight.

        Refreshes run on the event loop; called without a running loop the
        refresh is deferred to the next tick that has one.
        """
        if self.state.fetch_running:
            return None
        if self._refresh_task is not None and not self._refresh_task.done():
            # created this tick, not started yet
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logs.debug("[Kiosk] no running event loop, refresh deferred")
            return None
        self._refresh_task = loop.create_task(self.refresh_all())
        return self._refresh_task

    async def refresh_all(self) -> bool:
        """
        Refetch every panel concurrently and re-render them together.

        Returns False when skipped because another refresh is in flight.
        Never raises; a failing period shows no data.
        """
        s = self.state
        if s.fetch_running:
            logs.debug("[Kiosk] refresh already in flight, skipped")
            return False

        s.fetch_running = True
        try:
            periods = list(s.panels)
            results = await asyncio.gather(
                *(self.gateway.fetch_period(p) for p in periods),
                return_exceptions=True,
            )

            for period, result in zip(periods, results):
                if isinstance(result, BaseException):
                    logs.error(f"[Kiosk] fetch {period.value} raised {result!r}, showing no data")
                    result = []
                s.panels[period].replace_pages(paginate(result, self.cfg.page_size))

            s.last_fetch = self.clock.monotonic()
            s.refresh_count += 1
            logs.info(
                "[Kiosk] refreshed "
                + ", ".join(f"{p.value}={s.panels[p].page_count}p" for p in periods)
            )
            self.render_all()
        except Exception:
            logs.exception("[Kiosk] refresh cycle failed")
        finally:
            s.fetch_running = False
        return True

    async def wait_refresh(self) -> None:
        """Wait for the background refresh started by a tick, if any."""
        task = self._refresh_task
        if task is not None and not task.done():
            await task

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------
    def render_all(self) -> None:
        for period, panel in self.state.panels.items():
            self._safe_render(
                self.renderer.render_panel,
                period,
                panel.current_page(),
                panel.current_index,
                panel.page_count,
            )

    def _safe_render(self, fn, *args) -> None:
        try:
            fn(*args)
        except Exception:
            logs.exception(f"[Kiosk] renderer failed in {getattr(fn, '__name__', fn)}")

    # ------------------------------------------------------------------
    # watchdog
    # ------------------------------------------------------------------
    def start_watchdog(self) -> None:
        if self._watchdog is None:
            self._watchdog = self.clock.call_later(self.cfg.watchdog_interval, self._on_watchdog)

    def _on_watchdog(self) -> None:
        if self.state.reload_fired:
            return
        self.state.reload_fired = True
        logs.warning(f"[Kiosk] watchdog: {self.cfg.watchdog_interval:.0f}s uptime reached, reloading")
        self._running = False
        if self.on_reload is not None:
            self.on_reload()

    # ------------------------------------------------------------------
    # main loop
    # ------------------------------------------------------------------
    async def run(self, ticks: Optional[int] = None) -> None:
        """
        Tick until stopped, the watchdog fires, or `ticks` ticks have run.

        Tick n is due at start + n * tick_interval, so time spent inside a
        tick does not push later ticks back. After a stall longer than one
        interval the schedule restarts from now instead of catching up.
        """
        self._running = True
        self.start_watchdog()
        self.render_all()
        self.schedule_refresh()

        interval = self.cfg.tick_interval
        origin = self.clock.monotonic()
        n = 0
        while self._running and (ticks is None or n < ticks):
            n += 1
            delay = origin + n * interval - self.clock.monotonic()
            if delay > 0:
                await self.clock.sleep(delay)
            elif delay <= -interval:
                logs.debug(f"[Kiosk] tick {n} late by {-delay:.2f}s, resyncing")
                origin = self.clock.monotonic() - n * interval
            if not self._running:
                break
            self.tick()

    def stop(self) -> None:
        self._running = False

    async def close(self) -> None:
        self._running = False
        if self._watchdog is not None:
            self._watchdog.cancel()
            self._watchdog = None
        task = self._refresh_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

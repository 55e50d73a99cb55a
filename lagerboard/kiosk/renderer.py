#!filepath: lagerboard/kiosk/renderer.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol, Sequence

from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lagerboard.engines.period_engine import Period
from lagerboard.kiosk import formatting as fmt
from lagerboard.models.project import Project


class Renderer(Protocol):
    """
    Display surface of the kiosk. Receives (period, current page) pairs on
    every rotation and refresh; keeps the server order of a page.
    """

    def render_panel(
        self,
        period: Period,
        page: Optional[Sequence[Project]],
        index: int,
        page_count: int,
    ) -> None:
        ...

    def render_clock(self, now: datetime) -> None:
        ...

    def render_counters(self, counters: Dict[Period, str]) -> None:
        ...


TITLES: Dict[Period, str] = {
    Period.CONFIRMED: "Skal pakkes",
    Period.PREPPED: "Er pakket",
    Period.ON_LOCATION: "Kommer hjem",
    Period.DELAYED: "Forsinket",
    Period.TO_BE_INVOICED: "Pakket ud",
    Period.TRANSPORT: "Transport",
}

BORDERS: Dict[Period, str] = {
    Period.CONFIRMED: "yellow",
    Period.PREPPED: "blue",
    Period.ON_LOCATION: "green",
    Period.DELAYED: "dark_orange",
    Period.TO_BE_INVOICED: "magenta",
    Period.TRANSPORT: "cyan",
}


class ConsoleRenderer:
    """
    Terminal version of the warehouse screen (rich Live): header with clock,
    one column per period.
    """

    def __init__(self, periods: Sequence[Period], console: Optional[Console] = None):
        self.periods = list(periods)
        self.console = console or Console()
        self._pages: Dict[Period, Sequence[Project]] = {p: () for p in self.periods}
        self._counters: Dict[Period, str] = {p: "0" for p in self.periods}
        self._now = datetime.now()
        self._live: Optional[Live] = None

    # ---------- lifecycle ----------
    def __enter__(self) -> "ConsoleRenderer":
        self._live = Live(self._build(), console=self.console, screen=True, auto_refresh=False)
        self._live.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._live is not None:
            self._live.__exit__(exc_type, exc, tb)
            self._live = None

    # ---------- Renderer ----------
    def render_panel(self, period, page, index, page_count) -> None:
        self._pages[period] = tuple(page or ())

    def render_clock(self, now: datetime) -> None:
        self._now = now

    def render_counters(self, counters: Dict[Period, str]) -> None:
        self._counters.update(counters)
        self._refresh()

    # ---------- drawing ----------
    def _refresh(self) -> None:
        if self._live is not None:
            self._live.update(self._build(), refresh=True)

    def _build(self) -> Layout:
        layout = Layout()
        layout.split_column(Layout(self._header(), name="header", size=3), Layout(name="body"))
        layout["body"].split_row(*(Layout(self._panel(p), name=p.value) for p in self.periods))
        return layout

    def _header(self) -> Panel:
        text = Text(justify="right")
        text.append(fmt.clock_text(self._now), style="bold")
        text.append("  " + fmt.date_text(self._now), style="dim")
        return Panel(text, title="Lager", title_align="left")

    def _panel(self, period: Period) -> Panel:
        table = Table.grid(expand=True, padding=(0, 1))
        table.add_column(width=2)
        table.add_column(ratio=1)
        table.add_column(justify="right", width=7)

        page = self._pages.get(period, ())
        for project in page:
            table.add_row(*self._row(project, period))

        body = table if page else Text("Ingen projekter", style="dim", justify="center")
        return Panel(
            Group(body),
            title=TITLES[period],
            subtitle=self._counters.get(period, "0"),
            border_style=BORDERS[period],
        )

    def _row(self, project: Project, period: Period):
        letter = Text(fmt.bay_letter(project, period) or "", style="bold")

        name = Text(project.displayname, style="bold")
        sub = fmt.subtitle(project)
        if sub:
            name.append("\n" + sub.upper(), style="dim")

        when = Text(fmt.date_label(fmt.project_date(project, period), self._now), style="dim")
        return letter, name, when

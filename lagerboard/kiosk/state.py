# lagerboard/kiosk/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from lagerboard.engines.pager import Page, clamp_index
from lagerboard.engines.period_engine import Period


@dataclass
class RotationState:
    """
    Pages of one panel and the cursor into them.

    The cursor survives refetches; it is clamped against whatever page
    count is current, so it is always a valid index (0 with no pages).
    """
    pages: List[Page] = field(default_factory=list)
    current_index: int = 0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def replace_pages(self, pages: Sequence[Page]) -> None:
        self.pages = list(pages)
        self.current_index = clamp_index(self.current_index, self.page_count)

    def advance(self) -> None:
        self.current_index = clamp_index(self.current_index + 1, self.page_count)

    def current_page(self) -> Optional[Page]:
        if not self.pages:
            return None
        return self.pages[clamp_index(self.current_index, self.page_count)]


@dataclass
class KioskState:
    """
    Everything the tick handler and the refresh handler share.
    Owned by one DisplayRotationEngine; both handlers run on one loop.
    """
    panels: Dict[Period, RotationState]
    countdown: int
    last_fetch: Optional[float] = None     # clock.monotonic() of last completed refresh
    fetch_running: bool = False
    reload_fired: bool = False
    refresh_count: int = 0

    @classmethod
    def initial(cls, periods: Sequence[Period], countdown: int) -> "KioskState":
        return cls(panels={p: RotationState() for p in periods}, countdown=countdown)

# lagerboard/config/kiosk_config.py
from typing import List

from pydantic import BaseModel, Field, field_validator

from lagerboard.engines.period_engine import DISPLAY_PERIODS, Period


class KioskConfig(BaseModel):
    """
    Operational constants of the warehouse display. The defaults are the
    values the kiosk has always run with.
    """

    base_url: str = "http://127.0.0.1:5000"
    page_size: int = Field(default=9, gt=0)
    rotation_interval: int = Field(default=30, gt=0)   # seconds between page flips
    stale_after: float = Field(default=120.0, gt=0)    # refetch when data is older
    fetch_timeout: float = Field(default=10.0, gt=0)
    watchdog_interval: float = Field(default=6 * 60 * 60, gt=0)
    tick_interval: float = Field(default=1.0, gt=0)
    periods: List[Period] = Field(default_factory=lambda: list(DISPLAY_PERIODS))

    @field_validator("periods")
    @classmethod
    def _unique_periods(cls, v: List[Period]) -> List[Period]:
        if len(v) != len(set(v)):
            raise ValueError("kiosk periods must be unique")
        return v

#!filepath: lagerboard/utils/datetime_utils.py
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Optional


class DateTimeUtils:
    """
    Calendar helpers shared by the period engine and the display formatting.
    """

    DANISH_MONTHS = ["jan", "feb", "mar", "apr", "maj", "jun", "jul", "aug", "sep", "okt", "nov", "dec"]
    # indexed by datetime.weekday(): monday == 0
    DANISH_DAYS = ["man", "tir", "ons", "tor", "fre", "lor", "son"]

    @staticmethod
    def add_business_days(d: date, days: int) -> date:
        """
        Step `days` weekdays forward (or backward when negative), skipping
        Saturday and Sunday. `days == 0` returns `d` unchanged, even on a
        weekend.
        """
        step = 1 if days > 0 else -1
        remaining = days
        current = d
        while remaining != 0:
            current = current + timedelta(days=step)
            if current.weekday() < 5:
                remaining -= step
        return current

    @staticmethod
    def start_of_day(d: date) -> datetime:
        return datetime(d.year, d.month, d.day)

    @staticmethod
    def end_of_day(d: date) -> datetime:
        return datetime(d.year, d.month, d.day, 23, 59, 59, 999999)

    @staticmethod
    def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
        """
        Aware timestamps are shifted to local time and stripped of tzinfo so
        that they compare with `datetime.now()`. Naive values pass through.
        """
        if value is None or value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)

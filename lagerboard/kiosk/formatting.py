# lagerboard/kiosk/formatting.py
"""Text shown on the warehouse screen. Danish, as on the floor."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from lagerboard.engines.period_engine import Period
from lagerboard.models.project import Project
from lagerboard.utils.datetime_utils import DateTimeUtils

MONTHS = DateTimeUtils.DANISH_MONTHS
DAYS = DateTimeUtils.DANISH_DAYS


def clock_text(now: datetime) -> str:
    return f"{now.hour:02d}:{now.minute:02d}"


def date_text(now: datetime) -> str:
    return f"{DAYS[now.weekday()]} {now.day}. {MONTHS[now.month - 1]} {now.year}"


def counter_text(index: int, page_count: int, countdown: int) -> str:
    """'2/3 | 17s' while paging, '0' for an empty panel."""
    if not page_count:
        return "0"
    return f"{index + 1}/{page_count} | {countdown}s"


def bay_letter(project: Project, period: Period) -> Optional[str]:
    """
    Bay the goods leave from (confirmed, prepped) or come back to
    (on location). Delayed projects get no letter.
    """
    if period in (Period.CONFIRMED, Period.PREPPED):
        return project.wh_out_letter or None
    if period is Period.ON_LOCATION:
        return project.wh_in_letter or None
    return None


def subtitle(project: Project) -> Optional[str]:
    if project.project and project.project != project.displayname:
        return project.project
    return None


def project_date(project: Project, period: Period) -> Optional[datetime]:
    if period is Period.PREPPED:
        return project.sp_start_up
    if period is Period.CONFIRMED:
        return project.sp_start_pp
    return project.sp_end_pp


def date_label(when: Optional[datetime], today: datetime) -> str:
    if when is None:
        return "-"
    hhmm = f"{when.hour:02d}:{when.minute:02d}"
    if when.date() == today.date():
        return f"I dag\n{hhmm}"
    return f"{when.day}. {MONTHS[when.month - 1]}\n{hhmm}"

# lagerboard/models/project.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from lagerboard.utils.datetime_utils import DateTimeUtils


class Project(BaseModel):
    """
    One sub-project as served by /projects/<period>.

    Read-only for the kiosk. Which timestamps are present depends on the
    period query (delayed only carries sp_start_up and sp_end_pp).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    sp_id: int
    displayname: str = ""
    project: str = ""
    sp_start_pp: Optional[datetime] = None   # prep phase
    sp_end_pp: Optional[datetime] = None
    sp_start_up: Optional[datetime] = None   # pack phase
    sp_end_up: Optional[datetime] = None
    wh_out_letter: Optional[str] = None
    wh_in_letter: Optional[str] = None
    status_name: Optional[str] = None

    @field_validator("sp_start_pp", "sp_end_pp", "sp_start_up", "sp_end_up")
    @classmethod
    def _local_time(cls, v: Optional[datetime]) -> Optional[datetime]:
        return DateTimeUtils.to_local_naive(v)

    @field_validator("displayname", "project", mode="before")
    @classmethod
    def _no_null_text(cls, v):
        return "" if v is None else v



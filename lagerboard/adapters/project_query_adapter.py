#!filepath: lagerboard/adapters/project_query_adapter.py
from __future__ import annotations

import asyncio
from typing import List, Optional

import aiohttp
from pydantic import ValidationError

from lagerboard.adapters.base_adapter import BaseAdapter
from lagerboard.engines.period_engine import Period
from lagerboard.models.project import Project
from lagerboard.utils.errors import QueryFailure
from lagerboard import logs


class ProjectQueryAdapter(BaseAdapter):
    """
    Adapter layer:
    - one GET per period against <base_url>/projects/<slug>
    - bounded by a per-request timeout
    - failures become QueryFailure; fetch_period() turns them into []

    Calls are independent; several may run concurrently on one loop.
    """

    def __init__(
            self,
            base_url: str,
            timeout: float = 10.0,
            session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    # --------------------------------------------------
    async def __aenter__(self) -> "ProjectQueryAdapter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    # --------------------------------------------------
    def url_for(self, period: Period) -> str:
        return f"{self.base_url}/projects/{period.slug}"

    async def fetch_period(self, period: Period) -> List[Project]:
        """
        Projects for `period` in server order, or [] when the fetch fails.
        """
        try:
            return await self.fetch_period_strict(period)
        except QueryFailure as e:
            logs.warning(f"[Query] {e} -> showing no data")
            return []

    async def fetch_period_strict(self, period: Period) -> List[Project]:
        url = self.url_for(period)
        session = self._ensure_session()

        with self.timer(f"fetch_{period.value}"):
            try:
                async with session.get(
                        url,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as resp:
                    if not 200 <= resp.status < 300:
                        raise QueryFailure(period.value, f"HTTP {resp.status}")
                    payload = await resp.json(content_type=None)
            except asyncio.TimeoutError:
                raise QueryFailure(period.value, f"timed out after {self.timeout}s")
            except aiohttp.ClientError as e:
                raise QueryFailure(period.value, f"{type(e).__name__}: {e}")
            except ValueError:
                raise QueryFailure(period.value, "response is not JSON")

        if not isinstance(payload, list):
            raise QueryFailure(period.value, f"expected a JSON array, got {type(payload).__name__}")

        return self._parse_rows(period, payload)

    def _parse_rows(self, period: Period, payload: list) -> List[Project]:
        """
        Validate row by row: a bad row is dropped with a warning, the rest
        are kept in server order. A non-empty payload with no usable row is
        a QueryFailure.
        """
        projects = []
        for i, row in enumerate(payload):
            try:
                projects.append(Project.model_validate(row))
            except ValidationError as e:
                logs.warning(
                    f"[Query] {period.value}: dropped record #{i} "
                    f"({e.error_count()} errors: {e.errors()[0]['loc']})"
                )

        if payload and not projects:
            raise QueryFailure(period.value, f"malformed project records (0 of {len(payload)} usable)")
        return projects

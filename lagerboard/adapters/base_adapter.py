from __future__ import annotations

from contextlib import contextmanager
from time import perf_counter

from lagerboard import logs


class BaseAdapter:
    """
    Common base for I/O adapters.

    - timer() measures a block and logs its wall time at DEBUG
    """

    def timer(self, name: str = ''):
        """
        with adapter.timer("query_confirmed"):
            rows = conn.execute(...)
        """
        if not name:
            name = self.__class__.__name__
        return _timed(f"{self.__class__.__name__}.{name}")


@contextmanager
def _timed(label: str):
    start = perf_counter()
    try:
        yield
    finally:
        logs.debug(f"[TIME] {label} took {perf_counter() - start:.4f}s")

#!filepath: lagerboard/utils/logger.py
import os
import sys
from functools import wraps
from time import perf_counter
from typing import Callable

from loguru import logger


class Logging:
    """
    Process-wide logging built on loguru
    ---------------------------------------
    - daily file sink with rotation and retention
    - optional console sink (kiosk runs in a terminal, so off by default there)
    - function-level logging decorator
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        console: bool = False,
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.console = console

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    def _configure(self) -> None:
        """
        Replace every loguru sink with ours.
        """
        logger.remove()

        logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,
            backtrace=True,
            diagnose=False,
        )

        if self.console:
            logger.add(
                sink=sys.stderr,
                level=self.level,
                format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
            )

        logger.info("-----------Logger initialized-----------")

    def reconfigure(self, **settings) -> None:
        self.log_dir = settings.get("log_dir", self.log_dir)
        self.rotation = settings.get("rotation", self.rotation)
        self.retention = settings.get("retention", self.retention)
        self.level = settings.get("log_level", self.level)
        self.console = settings.get("console", self.console)

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    # ---------- passthroughs ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    def complete(self) -> None:
        """Block until the enqueued sinks have written everything."""
        logger.complete()

    # ---------- decorator ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_time: bool = True,
    ) -> Callable:
        """
        Log failures (and optionally inputs / elapsed time) of the wrapped
        function. Exceptions are re-raised.
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                if log_inputs:
                    logger.debug(f"[CALL] {func.__name__} args={args[1:]} kwargs={kwargs}")

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


def init_logging(cfg) -> Logging:
    """
    Rebuild the global `logs` sinks from a LogConfig.
    """
    logs.reconfigure(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        log_level=cfg.level,
        console=cfg.console,
    )
    return logs


# default global logs, rebuilt by init_logging()
logs = Logging()

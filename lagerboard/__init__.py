#!filepath: lagerboard/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.retry import Retry
from .config.app_config import AppConfig
from .utils.datetime_utils import DateTimeUtils

__version__ = "0.1.0"

datetime_utils = DateTimeUtils

# alias
retry = Retry

__all__ = [
    "logs", "Logging", "init_logging",
    "retry",
    "AppConfig",
    "datetime_utils",
]

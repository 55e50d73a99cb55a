#!filepath: lagerboard/config/app_config.py
import yaml
from pydantic import BaseModel
from dotenv import load_dotenv
import os

from .log_config import LogConfig
from .kiosk_config import KioskConfig
from .api_config import ApiConfig, DatabaseConfig


def project_root() -> str:
    """
    lagerboard/config/app_config.py → lagerboard/config → lagerboard → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    kiosk: KioskConfig = KioskConfig()
    api: ApiConfig = ApiConfig()
    database: DatabaseConfig = DatabaseConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load the YAML config, then overlay values from .env / the environment.
        - default file: lagerboard/config/base.yml
        - DATABASE_URL and KIOSK_BASE_URL win over the file
        """
        root = project_root()

        # 1) .env at the project root (missing file is fine)
        load_dotenv(os.path.join(root, ".env"))

        # 2) config file
        if path is None:
            path = os.path.join(os.path.dirname(__file__), "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) YAML + environment
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if os.getenv("DATABASE_URL"):
            raw.setdefault("database", {})["url"] = os.getenv("DATABASE_URL")
        if os.getenv("KIOSK_BASE_URL"):
            raw.setdefault("kiosk", {})["base_url"] = os.getenv("KIOSK_BASE_URL")

        return cls(**raw)

#!filepath: tests/test_app_config.py
import yaml
import pytest
from pydantic import ValidationError

from lagerboard import AppConfig
from lagerboard.config.kiosk_config import KioskConfig
from lagerboard.config.log_config import LogConfig
from lagerboard.engines.period_engine import DISPLAY_PERIODS, Period


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("KIOSK_BASE_URL", raising=False)


@pytest.fixture
def sample_config_file(tmp_path):
    """
    Temporary YAML config; pytest cleans the directory.
    """
    data = {
        "log": {"dir": str(tmp_path / "logs"), "level": "DEBUG"},
        "kiosk": {
            "base_url": "http://lager.local:5000",
            "rotation_interval": 15,
            "periods": ["delayed", "onLocation"],
        },
        "api": {"port": 8080, "business_days": True},
        "database": {"url": "sqlite:///:memory:"},
    }

    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


def test_app_config_load(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.kiosk, KioskConfig)
    assert cfg.log.level == "DEBUG"

    assert cfg.kiosk.base_url == "http://lager.local:5000"
    assert cfg.kiosk.rotation_interval == 15
    assert cfg.kiosk.periods == [Period.DELAYED, Period.ON_LOCATION]
    # untouched keys keep their defaults
    assert cfg.kiosk.page_size == 9
    assert cfg.kiosk.stale_after == 120

    assert cfg.api.port == 8080
    assert cfg.api.business_days is True
    assert cfg.database.url == "sqlite:///:memory:"


def test_default_file_holds_kiosk_constants():
    cfg = AppConfig.load()

    k = cfg.kiosk
    assert (k.page_size, k.rotation_interval, k.stale_after) == (9, 30, 120)
    assert k.fetch_timeout == 10
    assert k.watchdog_interval == 6 * 60 * 60
    assert k.tick_interval == 1
    assert k.periods == list(DISPLAY_PERIODS)
    assert cfg.api.business_days is False


def test_environment_overrides_file(sample_config_file, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mysql+pymysql://lager:pw@db/lager")
    monkeypatch.setenv("KIOSK_BASE_URL", "http://10.0.0.5:5000")

    cfg = AppConfig.load(path=str(sample_config_file))

    assert cfg.database.url == "mysql+pymysql://lager:pw@db/lager"
    assert cfg.kiosk.base_url == "http://10.0.0.5:5000"


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=str(tmp_path / "nope.yml"))


@pytest.mark.parametrize(
    "kiosk",
    [
        {"periods": ["confirmed", "shipped"]},
        {"periods": ["confirmed", "confirmed"]},
        {"page_size": 0},
        {"rotation_interval": -1},
    ],
)
def test_invalid_kiosk_section(tmp_path, kiosk):
    path = tmp_path / "bad.yml"
    path.write_text(yaml.safe_dump({"kiosk": kiosk}), encoding="utf-8")

    with pytest.raises(ValidationError):
        AppConfig.load(path=str(path))


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert AppConfig.load(path=str(path)) == AppConfig()

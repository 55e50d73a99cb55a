# lagerboard/config/api_config.py
from pydantic import BaseModel


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000
    business_days: bool = False


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///lagerboard.db"
    pool_recycle: int = 3600

# api/settings.py
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    PROJECT_NAME: str = "Tasks API"
    SERVER_ADDRESS: str = "127.0.0.1:3000"

    # Required: the process must not start without a database
    DATABASE_URL: str
    DATABASE_POOL_MIN_SIZE: int = Field(default=1, ge=0)
    DATABASE_POOL_MAX_SIZE: int = Field(default=16, ge=1)
    DATABASE_ACQUIRE_TIMEOUT: float = Field(default=5.0, gt=0)
    DATABASE_COMMAND_TIMEOUT: Optional[float] = None
    DATABASE_INIT_SCHEMA: bool = True

    LOG_LEVEL: str = "INFO"

    # Raw driver messages can contain table names, values and hostnames
    EXPOSE_ERROR_DETAILS: bool = False
    REPORT_MISSING_ON_UPDATE: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @field_validator("SERVER_ADDRESS")
    @classmethod
    def check_server_address(cls, value):
        host, sep, port = value.rpartition(":")
        if not sep or not host or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"SERVER_ADDRESS must look like host:port, got {value!r}")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value):
        # uvicorn only knows the canonical names
        level = value.upper()
        level = {"WARN": "WARNING", "FATAL": "CRITICAL"}.get(level, level)
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def server_host(self) -> str:
        return self.SERVER_ADDRESS.rpartition(":")[0].strip("[]")

    @property
    def server_port(self) -> int:
        return int(self.SERVER_ADDRESS.rpartition(":")[2])


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process; tests build their own instances."""
    return Settings()

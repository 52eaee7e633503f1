# src/config.py
import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    """환경 변수에서 읽어온 애플리케이션 설정입니다."""

    database_url: str
    host: str
    port: int
    log_level: str


def _int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@lru_cache
def get_settings() -> Settings:
    """현재 환경 변수를 읽어 Settings 객체를 생성합니다. (한 번만 읽고 캐시)"""
    return Settings(
        database_url=os.getenv("ADMIN_DATABASE_URL", "sqlite:///admin_metadata.db"),
        host=os.getenv("ADMIN_HOST", ""),
        port=_int(os.getenv("ADMIN_PORT"), 8000),
        log_level=os.getenv("ADMIN_LOG_LEVEL", "INFO").upper(),
    )

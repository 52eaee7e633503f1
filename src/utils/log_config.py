# src/utils/log_config.py
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """
    애플리케이션 전체의 로깅 형식과 레벨을 설정합니다.
    요청 본문 등 민감한 데이터는 로그로 남기지 않습니다.

    Args:
        level: 로그 레벨 문자열 (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    # SQLAlchemy 엔진 로그는 기본적으로 숨김
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

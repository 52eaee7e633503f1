from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from src.config import get_settings

# 데이터베이스 연결 문자열은 환경 변수(ADMIN_DATABASE_URL)에서 읽어옵니다.
SQLALCHEMY_DATABASE_URL = get_settings().database_url


def build_engine(url: str, **kwargs) -> Engine:
    """
    주어진 URL로 SQLAlchemy 엔진을 생성합니다.
    SQLite인 경우 스레드 공유를 허용하고, 연결마다 외래 키 제약을 활성화합니다.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    new_engine = create_engine(url, connect_args=connect_args, **kwargs)

    if url.startswith("sqlite"):
        @event.listens_for(new_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


# SQLAlchemy 엔진 생성
engine = build_engine(SQLALCHEMY_DATABASE_URL)

# 데이터베이스 세션 생성을 위한 SessionLocal 클래스
# autocommit=False, autoflush=False로 설정하여, 명시적으로 commit을 호출해야 DB에 반영됩니다.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()

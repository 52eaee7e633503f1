# tests/conftest.py
import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database.database import Base, build_engine
from src.database import models


@pytest.fixture
def engine():
    """테스트마다 새로 만드는 인메모리 SQLite 엔진 (모든 세션이 하나의 연결을 공유)."""
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seed_projects(db_session):
    """alpha, beta, gamma 세 개의 프로젝트를 미리 생성합니다."""
    projects = [models.Project(name=name) for name in ("alpha", "beta", "gamma")]
    db_session.add_all(projects)
    db_session.commit()
    return [p.id for p in projects]

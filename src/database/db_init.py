import logging

from src.config import get_settings
from src.utils.log_config import configure_logging
from .database import engine, SessionLocal, Base
from .models import *

logger = logging.getLogger(__name__)

def initialize_db(bind=None, session_factory=None):
    """
    DB와 테이블을 생성하고, 기본 데이터를 삽입합니다.
    SQLAlchemy 모델을 사용하여 모든 작업을 수행합니다.

    Args:
        bind: 테이블을 생성할 엔진. 없으면 설정의 기본 엔진을 사용합니다.
        session_factory: 기본 데이터 삽입에 사용할 세션 팩토리.
    """
    logger.info("Initializing database...")

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Tables created.")

    db = (session_factory or SessionLocal)()
    try:
        # 기본 데이터가 이미 있는지 확인
        if db.query(User).first():
            logger.info("Seed data already exists, skipping.")
            return

        default_project = Project(name='default')
        admin_user = User(name='admin', universal=True, rule_level=int(RuleLevel.HIGH))
        db.add(default_project)
        db.add(admin_user)

        # 변경사항을 커밋하여 각 객체의 id를 할당받습니다.
        db.commit()

        db.add(UserProject(user_id=admin_user.id, project_id=default_project.id))
        db.commit()
        logger.info("Seed data inserted.")

    except Exception:
        logger.exception("Database initialization failed.")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == '__main__':
    configure_logging(get_settings().log_level)
    initialize_db()

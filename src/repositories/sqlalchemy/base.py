import logging
import re
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from src.repositories.faults import (
    PersistenceFault, RecordNotFound, NotNullFault, UniqueFault, StorageFault
)

logger = logging.getLogger(__name__)

# 예: "UNIQUE constraint failed: users.name" -> "name"
_CONSTRAINT_FIELD = re.compile(r"constraint failed: (?:\w+\.)?(\w+)")


def translate_integrity_error(error: IntegrityError) -> PersistenceFault:
    """
    SQLite 제약 조건 위반을 저장소 장애 클래스로 변환합니다.
    확장 오류 이름(sqlite_errorname)을 우선 사용하고, 없으면 메시지 접두어로 판별합니다.
    """
    orig = error.orig
    error_name = getattr(orig, "sqlite_errorname", "") or ""
    message = str(orig)
    match = _CONSTRAINT_FIELD.search(message)
    field = match.group(1) if match else None

    if error_name == "SQLITE_CONSTRAINT_NOTNULL" or message.startswith("NOT NULL constraint failed"):
        return NotNullFault(field)
    if error_name in ("SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY") \
            or message.startswith("UNIQUE constraint failed"):
        return UniqueFault(field)
    return StorageFault(error)


@contextmanager
def translate_faults(entity: str) -> Iterator[None]:
    """블록 안에서 발생한 SQLAlchemy 예외를 PersistenceFault로 바꿔서 다시 발생시킵니다."""
    try:
        yield
    except PersistenceFault:
        raise
    except IntegrityError as e:
        raise translate_integrity_error(e) from e
    except StaleDataError as e:
        # UPDATE/DELETE 대상 행이 그 사이 사라진 경우
        raise RecordNotFound(entity) from e
    except SQLAlchemyError as e:
        logger.debug("Storage error on %s: %s", entity, e)
        raise StorageFault(e) from e


class SqlalchemyRepository:
    """세션 보관, 커밋, 트랜잭션 경계를 공통으로 처리하는 리포지토리 기반 클래스."""
    entity = "record"

    def __init__(self, db_session: Session):
        self.db = db_session
        self._in_transaction = False

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._in_transaction:
            # 이미 바깥 트랜잭션 안에 있으면 그 경계를 그대로 사용
            yield
            return

        self._in_transaction = True
        try:
            yield
            with translate_faults(self.entity):
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._in_transaction = False

    def _commit(self):
        """트랜잭션 안이면 flush만, 밖이면 즉시 commit 합니다. 실패 시 롤백합니다."""
        with translate_faults(self.entity):
            try:
                if self._in_transaction:
                    self.db.flush()
                else:
                    self.db.commit()
            except SQLAlchemyError:
                if not self._in_transaction:
                    self.db.rollback()
                raise

    def _refresh_or_not_found(self, model, key):
        """DB에서 객체를 다시 읽습니다. 행이 없으면 RecordNotFound를 발생시킵니다."""
        with translate_faults(self.entity):
            try:
                self.db.refresh(model)
            except InvalidRequestError as e:
                # "Could not refresh instance" 및 ObjectDeletedError
                raise RecordNotFound(self.entity, key) from e

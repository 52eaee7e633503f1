# src/repositories/faults.py
"""
리포지토리(Persistence Gateway)가 발생시키는 저장소 장애의 닫힌 집합입니다.
서비스 계층은 구체적인 DB 드라이버 예외 대신 이 클래스들만 처리합니다.
"""
from typing import Any, Optional


class PersistenceFault(Exception):
    """모든 저장소 장애의 기반 클래스"""
    pass


class RecordNotFound(PersistenceFault):
    """요청한 행이 존재하지 않을 때"""

    def __init__(self, entity: str, key: Any = None):
        super().__init__(f"{entity} record '{key}' not found.")
        self.entity = entity
        self.key = key


class NotNullFault(PersistenceFault):
    """필수 컬럼이 비어 있어 쓰기가 거부되었을 때"""

    def __init__(self, field: Optional[str] = None):
        super().__init__(f"NOT NULL constraint failed: {field}")
        self.field = field


class UniqueFault(PersistenceFault):
    """고유 값(기본 키 포함)이 중복되어 쓰기가 거부되었을 때"""

    def __init__(self, field: Optional[str] = None):
        super().__init__(f"UNIQUE constraint failed: {field}")
        self.field = field


class StorageFault(PersistenceFault):
    """그 밖의 모든 저장소/전송 계층 오류. 원인 예외를 보존합니다."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause))
        self.cause = cause

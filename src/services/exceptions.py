# src/services/exceptions.py
from typing import Optional, Type

from src.repositories.faults import (
    RecordNotFound, NotNullFault, UniqueFault
)


class ServiceError(Exception):
    """클라이언트에게 반환되는 모든 도메인 오류의 기반 클래스"""
    code = "error"
    message = "Error."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


# --- Bad Request ---
class BadRequestError(ServiceError):
    """요청 본문이나 경로 파라미터를 해석할 수 없을 때"""
    code = "bad_request"
    message = "Bad request."

class UserIdError(BadRequestError):
    """경로의 사용자 ID가 정수가 아닐 때"""
    code = "invalid_user_id"
    message = "Invalid user id."

class ProjectIdError(BadRequestError):
    """경로의 프로젝트 ID가 정수가 아닐 때"""
    code = "invalid_project_id"
    message = "Invalid project id."


# --- Validation ---
class ValidationFailedError(ServiceError):
    """필드 단위 검증 규칙을 통과하지 못했을 때"""
    code = "validation_failed"

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


# --- Not Found ---
class NotFoundError(ServiceError):
    code = "not_found"
    message = "Not found."

class UserNotFoundError(NotFoundError):
    """사용자를 찾을 수 없을 때"""
    code = "user_not_found"
    message = "User not found."

class ProjectNotFoundError(NotFoundError):
    """프로젝트를 찾을 수 없을 때"""
    code = "project_not_found"
    message = "Project not found."


# --- Constraint Violations ---
class NotNullViolationError(ServiceError):
    """필수 컬럼이 비어 있어 저장이 거부되었을 때"""
    code = "not_null_violation"
    message = "Required field is empty."

class UniqueConstraintViolationError(ServiceError):
    """고유 값이 중복되어 저장이 거부되었을 때"""
    code = "unique_violation"

    def __init__(self, field: Optional[str] = None, message: Optional[str] = None):
        super().__init__(message or f"Duplicate value for '{field}'.")
        self.field = field

class PrimaryKeyViolationError(UniqueConstraintViolationError):
    """기본 키(id)가 중복되었을 때"""
    code = "duplicate_primary_key"

    def __init__(self):
        super().__init__("id", "Duplicate primary key.")

class DuplicateUserNameError(UniqueConstraintViolationError):
    """동일한 이름의 사용자가 이미 존재할 때"""
    code = "duplicate_user_name"

    def __init__(self):
        super().__init__("name", "Duplicate user name.")

class DuplicateProjectNameError(UniqueConstraintViolationError):
    """동일한 이름의 프로젝트가 이미 존재할 때"""
    code = "duplicate_project_name"

    def __init__(self):
        super().__init__("name", "Duplicate project name.")


# --- Unexpected ---
class UnexpectedError(ServiceError):
    """
    그 밖의 모든 저장소/전송 오류.
    원인은 서버 측 진단을 위해 cause에 보존하고, 클라이언트에는 일반 메시지만 노출합니다.
    """
    code = "unexpected"
    message = "Unexpected error."

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__()
        self.cause = cause


def map_persistence_fault(
    fault: BaseException,
    not_found: Type[NotFoundError] = NotFoundError,
    duplicate_name: Optional[Type[UniqueConstraintViolationError]] = None,
) -> ServiceError:
    """
    저장소 장애를 도메인 오류 하나로 변환합니다. 모든 입력은 정확히 하나의 오류로 매핑되며,
    알 수 없는 장애는 UnexpectedError가 됩니다.

    Args:
        fault: 리포지토리에서 발생한 예외.
        not_found: RecordNotFound를 변환할 NotFound 계열 클래스.
        duplicate_name: 'name' 컬럼 중복을 변환할 클래스. 없으면 UniqueConstraintViolationError("name").

    Returns:
        발생시킬 ServiceError 인스턴스.
    """
    if isinstance(fault, RecordNotFound):
        return not_found()
    if isinstance(fault, NotNullFault):
        return NotNullViolationError()
    if isinstance(fault, UniqueFault):
        if fault.field == "id":
            return PrimaryKeyViolationError()
        if fault.field == "name" and duplicate_name is not None:
            return duplicate_name()
        return UniqueConstraintViolationError(fault.field)
    return UnexpectedError(getattr(fault, "cause", fault))

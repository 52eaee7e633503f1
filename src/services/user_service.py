import logging
from typing import Dict, Any, List

from src.database import models
from src.repositories.faults import PersistenceFault
from src.repositories.interfaces import IUserRepository, IProjectRepository
from src.services.exceptions import (
    UserNotFoundError, DuplicateUserNameError, UnexpectedError, map_persistence_fault
)
from src.services.requests import UserRequest
from src.services.validators import validate_user

logger = logging.getLogger(__name__)


def user_to_dict(user: models.User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "enableEmail": user.enable_email,
        "phone": user.phone,
        "enablePhone": user.enable_phone,
        "universal": user.universal,
        "ruleLevel": user.rule_level,
    }


def project_to_dict(project: models.Project) -> Dict[str, Any]:
    return {"id": project.id, "name": project.name}


class UserService:
    """사용자 리소스와 사용자-프로젝트 관계에 대한 관리 기능을 제공합니다."""

    def __init__(self, user_repo: IUserRepository, project_repo: IProjectRepository):
        """
        UserService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
            project_repo: 프로젝트 데이터에 접근하기 위한 리포지토리 (universal 사용자의 프로젝트 조회용).
        """
        self.user_repo = user_repo
        self.project_repo = project_repo

    def _fail(self, fault: PersistenceFault):
        error = map_persistence_fault(fault, not_found=UserNotFoundError, duplicate_name=DuplicateUserNameError)
        if isinstance(error, UnexpectedError):
            logger.error("Unexpected storage error: %r", fault, exc_info=fault)
        return error

    def list_users(self) -> List[Dict[str, Any]]:
        """모든 사용자의 목록을 조회합니다. (필터링/페이지네이션 없음)"""
        try:
            users = self.user_repo.list_all()
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        return [user_to_dict(u) for u in users]

    def get_user(self, user_id: int) -> Dict[str, Any]:
        """
        ID로 특정 사용자를 조회합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            UnexpectedError: 그 밖의 저장소 오류.
        """
        try:
            user = self.user_repo.find_by_id(user_id)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        return user_to_dict(user)

    def create_user(self, request: UserRequest) -> Dict[str, Any]:
        """
        새로운 사용자를 생성합니다.

        Args:
            request: 기본값이 채워진 생성 요청.

        Returns:
            할당된 id를 포함한 생성된 사용자.

        Raises:
            ValidationFailedError: 검증 규칙을 통과하지 못했을 때. (저장소 호출 없음)
            NotNullViolationError: 필수 컬럼이 비어 있을 때.
            DuplicateUserNameError: 동일한 이름의 사용자가 이미 존재할 때.
            PrimaryKeyViolationError: id가 중복될 때.
            UnexpectedError: 그 밖의 저장소 오류.
        """
        validate_user(request)

        new_user = models.User(
            name=request.name,
            email=request.email,
            enable_email=request.enable_email,
            phone=request.phone,
            enable_phone=request.enable_phone,
            universal=request.universal,
            rule_level=request.rule_level,
        )
        try:
            created_user = self.user_repo.create(new_user)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        logger.info("User %d created.", created_user.id)
        return user_to_dict(created_user)

    def update_user(self, user_id: int, request: UserRequest) -> Dict[str, Any]:
        """
        사용자의 모든 변경 가능 필드를 요청 값으로 교체합니다. (부분 수정이 아닌 전체 교체)
        요청에서 빠진 필드는 기존 값이 유지되지 않고 zero value로 초기화됩니다.

        Raises:
            ValidationFailedError: 검증 규칙을 통과하지 못했을 때. (저장소 호출 없음)
            UserNotFoundError: 사용자가 없거나 저장 전에 사라졌을 때.
            NotNullViolationError, DuplicateUserNameError, UnexpectedError
        """
        validate_user(request)

        try:
            user = self.user_repo.find_by_id(user_id)
            user.name = request.name
            user.email = request.email
            user.enable_email = request.enable_email
            user.phone = request.phone
            user.enable_phone = request.enable_phone
            user.universal = request.universal
            user.rule_level = request.rule_level
            updated_user = self.user_repo.save(user)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        logger.info("User %d updated.", user_id)
        return user_to_dict(updated_user)

    def delete_user(self, user_id: int) -> None:
        """
        사용자를 삭제합니다. 존재 여부를 미리 확인하지 않고 id 참조만으로 진행하며,
        프로젝트 연관 행을 먼저 지운 뒤 사용자 행을 삭제합니다.
        전체 과정은 하나의 트랜잭션으로 묶여 중간 실패 시 모두 롤백됩니다.

        Raises:
            UserNotFoundError: 삭제할 사용자 행이 없을 때.
            UnexpectedError: 그 밖의 저장소 오류.
        """
        user = models.User(id=user_id)
        try:
            with self.user_repo.transaction():
                projects = self.user_repo.find_projects(user)
                if projects:
                    self.user_repo.delete_projects(user, projects)
                self.user_repo.delete(user)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        logger.info("User %d deleted.", user_id)

    def get_user_projects(self, user_id: int) -> List[Dict[str, Any]]:
        """
        사용자가 볼 수 있는 프로젝트 목록을 조회합니다.
        universal 사용자는 모든 프로젝트를, 그 외에는 명시적으로 연결된 프로젝트만 반환합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            UnexpectedError: 그 밖의 저장소 오류.
        """
        try:
            user = self.user_repo.find_by_id(user_id)
            if user.universal:
                projects = self.project_repo.list_all()
            else:
                projects = self.user_repo.find_projects(user)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        return [project_to_dict(p) for p in projects]

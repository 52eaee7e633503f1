import logging
from typing import Dict, Any, List

from src.database import models
from src.repositories.faults import PersistenceFault
from src.repositories.interfaces import IProjectRepository, IUserRepository
from src.services.exceptions import (
    ProjectNotFoundError, UserNotFoundError, DuplicateProjectNameError,
    UnexpectedError, map_persistence_fault
)
from src.services.user_service import user_to_dict, project_to_dict
from src.services.validators import validate_project_name

logger = logging.getLogger(__name__)


class ProjectService:
    """프로젝트 리소스와 프로젝트 멤버십 관리 기능을 제공합니다."""

    def __init__(self, project_repo: IProjectRepository, user_repo: IUserRepository):
        self.project_repo = project_repo
        self.user_repo = user_repo

    def _fail(self, fault: PersistenceFault, not_found=ProjectNotFoundError):
        error = map_persistence_fault(fault, not_found=not_found, duplicate_name=DuplicateProjectNameError)
        if isinstance(error, UnexpectedError):
            logger.error("Unexpected storage error: %r", fault, exc_info=fault)
        return error

    def _find_project(self, project_id: int) -> models.Project:
        try:
            return self.project_repo.find_by_id(project_id)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault

    def _find_user(self, user_id: int) -> models.User:
        try:
            return self.user_repo.find_by_id(user_id)
        except PersistenceFault as fault:
            raise self._fail(fault, not_found=UserNotFoundError) from fault

    def create_project(self, name: str) -> Dict[str, Any]:
        """
        새로운 프로젝트를 생성합니다.

        Raises:
            ValidationFailedError: 프로젝트 이름이 규칙에 맞지 않을 때.
            DuplicateProjectNameError: 동일한 이름의 프로젝트가 이미 존재할 때.
        """
        validate_project_name(name)
        try:
            created_project = self.project_repo.create(models.Project(name=name))
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        logger.info("Project %d created.", created_project.id)
        return project_to_dict(created_project)

    def list_projects(self) -> List[Dict[str, Any]]:
        """모든 프로젝트의 목록을 조회합니다."""
        try:
            projects = self.project_repo.list_all()
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        return [project_to_dict(p) for p in projects]

    def get_project(self, project_id: int) -> Dict[str, Any]:
        return project_to_dict(self._find_project(project_id))

    def list_project_users(self, project_id: int) -> List[Dict[str, Any]]:
        """
        프로젝트에 명시적으로 소속된 사용자 목록을 조회합니다.
        universal 사용자는 소속 행이 없으면 포함되지 않습니다.
        """
        project = self._find_project(project_id)
        try:
            users = self.project_repo.list_users(project)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        return [user_to_dict(u) for u in users]

    def add_project_user(self, project_id: int, user_id: int) -> None:
        """
        사용자를 프로젝트에 소속시킵니다. 이미 소속되어 있으면 아무것도 하지 않습니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        project = self._find_project(project_id)
        user = self._find_user(user_id)
        try:
            self.project_repo.add_user(project, user)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        logger.info("User %d added to project %d.", user_id, project_id)

    def remove_project_user(self, project_id: int, user_id: int) -> None:
        """사용자의 프로젝트 소속을 해제합니다. 소속되어 있지 않으면 아무것도 하지 않습니다."""
        project = self._find_project(project_id)
        user = self._find_user(user_id)
        try:
            self.project_repo.remove_user(project, user)
        except PersistenceFault as fault:
            raise self._fail(fault) from fault
        logger.info("User %d removed from project %d.", user_id, project_id)

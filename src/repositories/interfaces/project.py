from abc import ABC, abstractmethod
from typing import List
from src.database import models

class IProjectRepository(ABC):
    @abstractmethod
    def create(self, project_model: models.Project) -> models.Project:
        """새로운 프로젝트를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, project_id: int) -> models.Project:
        """
        고유 ID로 특정 프로젝트를 조회합니다.

        Raises:
            RecordNotFound: 해당 ID의 프로젝트가 없을 때.
        """
        pass

    @abstractmethod
    def list_all(self) -> List[models.Project]:
        """모든 프로젝트의 목록을 조회합니다."""
        pass

    @abstractmethod
    def list_users(self, project: models.Project) -> List[models.User]:
        """프로젝트에 명시적으로 소속된 사용자 목록을 조회합니다."""
        pass

    @abstractmethod
    def add_user(self, project: models.Project, user: models.User) -> None:
        """사용자를 프로젝트에 소속시킵니다. 이미 소속되어 있으면 무시합니다."""
        pass

    @abstractmethod
    def remove_user(self, project: models.Project, user: models.User) -> None:
        """사용자의 프로젝트 소속을 해제합니다. 소속되어 있지 않으면 무시합니다."""
        pass

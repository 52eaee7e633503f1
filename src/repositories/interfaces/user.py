from abc import ABC, abstractmethod
from typing import ContextManager, List
from src.database import models

class IUserRepository(ABC):
    """
    사용자 데이터에 대한 Persistence Gateway입니다.
    실패 시 src.repositories.faults 의 PersistenceFault 하위 예외를 발생시킵니다.
    """

    @abstractmethod
    def transaction(self) -> ContextManager[None]:
        """
        블록 안의 모든 변경을 하나의 원자적 트랜잭션으로 묶습니다.
        블록이 예외로 끝나면 전체가 롤백됩니다.
        """
        pass

    @abstractmethod
    def list_all(self) -> List[models.User]:
        """모든 사용자의 목록을 조회합니다."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: int) -> models.User:
        """
        고유 ID로 특정 사용자를 조회합니다.

        Raises:
            RecordNotFound: 해당 ID의 사용자가 없을 때.
        """
        pass

    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """
        새로운 사용자를 데이터베이스에 생성합니다.

        Raises:
            NotNullFault, UniqueFault: 제약 조건을 위반했을 때.
        """
        pass

    @abstractmethod
    def save(self, user_model: models.User) -> models.User:
        """
        변경된 사용자 정보를 저장합니다.

        Raises:
            RecordNotFound: 저장 시점에 행이 사라졌을 때.
            NotNullFault, UniqueFault: 제약 조건을 위반했을 때.
        """
        pass

    @abstractmethod
    def delete(self, user: models.User) -> None:
        """
        사용자 행을 삭제합니다. 사용자 객체는 id만 채워진 참조여도 됩니다.

        Raises:
            RecordNotFound: 삭제할 행이 없을 때.
        """
        pass

    @abstractmethod
    def find_projects(self, user: models.User) -> List[models.Project]:
        """사용자와 명시적으로 연결된 프로젝트 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete_projects(self, user: models.User, projects: List[models.Project]) -> None:
        """사용자와 주어진 프로젝트들 사이의 연관 행을 삭제합니다."""
        pass

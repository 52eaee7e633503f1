# tests/services/test_project_service.py
import pytest
from unittest.mock import MagicMock

from src.services.project_service import ProjectService
from src.services.exceptions import *
from src.repositories.faults import RecordNotFound, UniqueFault
from src.repositories.interfaces import IUserRepository, IProjectRepository
from src.database import models


@pytest.fixture
def mock_user_repo() -> MagicMock:
    return MagicMock(spec=IUserRepository)

@pytest.fixture
def mock_project_repo() -> MagicMock:
    return MagicMock(spec=IProjectRepository)

@pytest.fixture
def project_service(mock_project_repo: MagicMock, mock_user_repo: MagicMock) -> ProjectService:
    return ProjectService(mock_project_repo, mock_user_repo)


class TestProjectManagement:
    def test_create_project_success(self, project_service: ProjectService, mock_project_repo: MagicMock):
        """프로젝트 생성 성공 시나리오를 테스트합니다."""
        mock_project_repo.create.return_value = models.Project(id=5, name="new-project")

        project = project_service.create_project("new-project")

        assert project == {"id": 5, "name": "new-project"}

    def test_create_project_duplicate_name(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.create.side_effect = UniqueFault("name")

        with pytest.raises(DuplicateProjectNameError):
            project_service.create_project("default")

    def test_create_project_invalid_name(self, project_service: ProjectService, mock_project_repo: MagicMock):
        with pytest.raises(ValidationFailedError):
            project_service.create_project("")
        mock_project_repo.create.assert_not_called()

    def test_get_project_not_found(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.find_by_id.side_effect = RecordNotFound("project", 3)

        with pytest.raises(ProjectNotFoundError):
            project_service.get_project(3)


class TestMembership:
    def test_add_project_user(self, project_service, mock_project_repo, mock_user_repo):
        """프로젝트와 사용자가 모두 존재하면 소속 관계를 추가합니다."""
        project = models.Project(id=1, name="alpha")
        user = models.User(id=2, name="alice")
        mock_project_repo.find_by_id.return_value = project
        mock_user_repo.find_by_id.return_value = user

        project_service.add_project_user(1, 2)

        mock_project_repo.add_user.assert_called_once_with(project, user)

    def test_add_project_user_missing_user(self, project_service, mock_project_repo, mock_user_repo):
        """사용자가 없으면 ProjectNotFound가 아닌 UserNotFoundError가 발생합니다."""
        mock_project_repo.find_by_id.return_value = models.Project(id=1, name="alpha")
        mock_user_repo.find_by_id.side_effect = RecordNotFound("user", 2)

        with pytest.raises(UserNotFoundError):
            project_service.add_project_user(1, 2)
        mock_project_repo.add_user.assert_not_called()

    def test_remove_project_user_missing_project(self, project_service, mock_project_repo, mock_user_repo):
        mock_project_repo.find_by_id.side_effect = RecordNotFound("project", 1)

        with pytest.raises(ProjectNotFoundError):
            project_service.remove_project_user(1, 2)
        mock_user_repo.find_by_id.assert_not_called()
        mock_project_repo.remove_user.assert_not_called()

    def test_list_project_users(self, project_service, mock_project_repo):
        project = models.Project(id=1, name="alpha")
        mock_project_repo.find_by_id.return_value = project
        mock_project_repo.list_users.return_value = [models.User(
            id=2, name="alice", email="", enable_email=True, phone="",
            enable_phone=True, universal=False, rule_level=0,
        )]

        users = project_service.list_project_users(1)

        assert [u["name"] for u in users] == ["alice"]
        mock_project_repo.list_users.assert_called_once_with(project)

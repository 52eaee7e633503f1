# tests/repositories/test_sqlalchemy_repositories.py
"""인메모리 SQLite를 사용한 SQLAlchemy 리포지토리 테스트."""
import pytest
from sqlalchemy import text

from src.database import models
from src.repositories.faults import RecordNotFound, NotNullFault, UniqueFault
from src.repositories.sqlalchemy.sqlalchemy_user_repository import SqlalchemyUserRepository
from src.repositories.sqlalchemy.sqlalchemy_project_repository import SqlalchemyProjectRepository


@pytest.fixture
def user_repo(db_session) -> SqlalchemyUserRepository:
    return SqlalchemyUserRepository(db_session)

@pytest.fixture
def project_repo(db_session) -> SqlalchemyProjectRepository:
    return SqlalchemyProjectRepository(db_session)


class TestUserRepository:
    def test_create_assigns_id_and_defaults(self, user_repo):
        user = user_repo.create(models.User(name="alice"))

        assert user.id is not None
        assert user.email == ""
        assert user.enable_email is True
        assert user.universal is False
        assert user.rule_level == 0

    def test_duplicate_name_raises_unique_fault(self, user_repo):
        user_repo.create(models.User(name="alice"))

        with pytest.raises(UniqueFault) as exc_info:
            user_repo.create(models.User(name="alice"))

        assert exc_info.value.field == "name"
        # 실패 후에도 세션은 롤백되어 계속 사용할 수 있어야 한다
        assert [u.name for u in user_repo.list_all()] == ["alice"]

    def test_duplicate_primary_key_raises_unique_fault(self, user_repo, db_session):
        first = user_repo.create(models.User(name="alice"))
        first_id = first.id
        db_session.expunge_all()

        with pytest.raises(UniqueFault) as exc_info:
            user_repo.create(models.User(id=first_id, name="bob"))

        assert exc_info.value.field == "id"

    def test_null_name_raises_not_null_fault(self, user_repo):
        with pytest.raises(NotNullFault) as exc_info:
            user_repo.create(models.User(name=None))
        assert exc_info.value.field == "name"

    def test_find_by_id_missing(self, user_repo):
        with pytest.raises(RecordNotFound):
            user_repo.find_by_id(999)

    def test_save_vanished_row_raises_not_found(self, user_repo, db_session):
        """조회와 저장 사이에 행이 사라지면 RecordNotFound가 발생합니다."""
        user = user_repo.create(models.User(name="alice"))
        db_session.execute(text("DELETE FROM users WHERE id = :id"), {"id": user.id})
        user.name = "alice2"

        with pytest.raises(RecordNotFound):
            user_repo.save(user)

    def test_save_unchanged_vanished_row_raises_not_found(self, user_repo, db_session):
        """변경된 필드가 없어 UPDATE가 나가지 않아도, 사라진 행은 RecordNotFound로 보고됩니다."""
        user = user_repo.create(models.User(name="alice"))
        db_session.execute(text("DELETE FROM users WHERE id = :id"), {"id": user.id})

        with pytest.raises(RecordNotFound):
            user_repo.save(user)

    def test_list_all_ordered_by_id(self, user_repo):
        user_repo.create(models.User(name="zed"))
        user_repo.create(models.User(name="amy"))

        assert [u.name for u in user_repo.list_all()] == ["zed", "amy"]

    def test_delete_missing_row(self, user_repo):
        with pytest.raises(RecordNotFound):
            user_repo.delete(models.User(id=999))

    def test_find_and_delete_projects(self, user_repo, project_repo, db_session, seed_projects):
        user = user_repo.create(models.User(name="alice"))
        for project_id in seed_projects[:2]:
            project_repo.add_user(project_repo.find_by_id(project_id), user)

        projects = user_repo.find_projects(models.User(id=user.id))
        assert sorted(p.id for p in projects) == sorted(seed_projects[:2])

        user_repo.delete_projects(models.User(id=user.id), projects)

        assert user_repo.find_projects(models.User(id=user.id)) == []
        assert db_session.query(models.UserProject).count() == 0

    def test_transaction_rolls_back_everything(self, user_repo):
        """트랜잭션 블록이 예외로 끝나면 블록 안의 변경이 모두 취소됩니다."""
        with pytest.raises(RecordNotFound):
            with user_repo.transaction():
                user_repo.create(models.User(name="alice"))
                user_repo.delete(models.User(id=999))

        assert user_repo.list_all() == []


class TestProjectRepository:
    def test_list_all_ordered_by_name(self, project_repo, seed_projects):
        assert [p.name for p in project_repo.list_all()] == ["alpha", "beta", "gamma"]

    def test_duplicate_name(self, project_repo, seed_projects):
        with pytest.raises(UniqueFault) as exc_info:
            project_repo.create(models.Project(name="alpha"))
        assert exc_info.value.field == "name"

    def test_add_user_is_idempotent(self, project_repo, user_repo, seed_projects):
        project = project_repo.find_by_id(seed_projects[0])
        user = user_repo.create(models.User(name="alice"))

        project_repo.add_user(project, user)
        project_repo.add_user(project, user)

        assert [u.name for u in project_repo.list_users(project)] == ["alice"]

    def test_remove_user(self, project_repo, user_repo, seed_projects):
        project = project_repo.find_by_id(seed_projects[0])
        user = user_repo.create(models.User(name="alice"))
        project_repo.add_user(project, user)

        project_repo.remove_user(project, user)
        project_repo.remove_user(project, user)

        assert project_repo.list_users(project) == []

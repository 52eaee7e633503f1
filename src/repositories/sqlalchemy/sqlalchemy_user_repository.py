from typing import List
from src.database import models
from src.repositories.faults import RecordNotFound
from src.repositories.interfaces import IUserRepository
from src.repositories.sqlalchemy.base import SqlalchemyRepository, translate_faults

class SqlalchemyUserRepository(SqlalchemyRepository, IUserRepository):
    entity = "user"

    def list_all(self) -> List[models.User]:
        with translate_faults(self.entity):
            return self.db.query(models.User).order_by(models.User.id.asc()).all()

    def find_by_id(self, user_id: int) -> models.User:
        with translate_faults(self.entity):
            user = self.db.query(models.User).filter(models.User.id == user_id).first()
        if user is None:
            raise RecordNotFound(self.entity, user_id)
        return user

    def create(self, user_model: models.User) -> models.User:
        self.db.add(user_model)
        self._commit()
        with translate_faults(self.entity):
            self.db.refresh(user_model)
        return user_model

    def save(self, user_model: models.User) -> models.User:
        user_id = user_model.id
        self.db.add(user_model)
        self._commit()
        # 변경된 필드가 없으면 UPDATE가 나가지 않으므로, 행이 사라진 경우는 refresh에서 드러난다
        self._refresh_or_not_found(user_model, user_id)
        return user_model

    def delete(self, user: models.User) -> None:
        with translate_faults(self.entity):
            deleted = self.db.query(models.User).filter(
                models.User.id == user.id
            ).delete(synchronize_session=False)
        if deleted == 0:
            raise RecordNotFound(self.entity, user.id)
        self._commit()

    def find_projects(self, user: models.User) -> List[models.Project]:
        with translate_faults(self.entity):
            return self.db.query(models.Project).join(
                models.UserProject, models.UserProject.project_id == models.Project.id
            ).filter(
                models.UserProject.user_id == user.id
            ).order_by(models.Project.name.asc()).all()

    def delete_projects(self, user: models.User, projects: List[models.Project]) -> None:
        project_ids = [p.id for p in projects]
        if project_ids:
            with translate_faults(self.entity):
                self.db.query(models.UserProject).filter(
                    models.UserProject.user_id == user.id,
                    models.UserProject.project_id.in_(project_ids)
                ).delete(synchronize_session=False)
        self._commit()

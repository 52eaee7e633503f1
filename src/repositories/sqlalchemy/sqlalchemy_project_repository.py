from typing import List
from src.database import models
from src.repositories.faults import RecordNotFound
from src.repositories.interfaces import IProjectRepository
from src.repositories.sqlalchemy.base import SqlalchemyRepository, translate_faults

class SqlalchemyProjectRepository(SqlalchemyRepository, IProjectRepository):
    entity = "project"

    def create(self, project_model: models.Project) -> models.Project:
        self.db.add(project_model)
        self._commit()
        with translate_faults(self.entity):
            self.db.refresh(project_model)
        return project_model

    def find_by_id(self, project_id: int) -> models.Project:
        with translate_faults(self.entity):
            project = self.db.query(models.Project).filter(models.Project.id == project_id).first()
        if project is None:
            raise RecordNotFound(self.entity, project_id)
        return project

    def list_all(self) -> List[models.Project]:
        with translate_faults(self.entity):
            return self.db.query(models.Project).order_by(models.Project.name.asc()).all()

    def list_users(self, project: models.Project) -> List[models.User]:
        with translate_faults(self.entity):
            return self.db.query(models.User).join(
                models.UserProject, models.UserProject.user_id == models.User.id
            ).filter(
                models.UserProject.project_id == project.id
            ).order_by(models.User.name.asc()).all()

    def add_user(self, project: models.Project, user: models.User):
        association = models.UserProject(user_id=user.id, project_id=project.id)
        with translate_faults(self.entity):
            self.db.merge(association) # INSERT OR IGNORE와 유사한 동작
        self._commit()

    def remove_user(self, project: models.Project, user: models.User):
        with translate_faults(self.entity):
            self.db.query(models.UserProject).filter(
                models.UserProject.user_id == user.id,
                models.UserProject.project_id == project.id
            ).delete(synchronize_session=False)
        self._commit()

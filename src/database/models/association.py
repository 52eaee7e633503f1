from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class UserProject(Base):
    """
    사용자(User)와 프로젝트(Project) 사이의 다대다(many-to-many) 관계를
    연결하는 연관 테이블(Association Table) 모델입니다.
    소속 여부 외의 속성은 가지지 않습니다.
    """
    __tablename__ = 'user_projects'
    user_id = Column(Integer, ForeignKey('users.id'), primary_key=True)
    project_id = Column(Integer, ForeignKey('projects.id'), primary_key=True)

    user = relationship("User", back_populates="project_associations")
    project = relationship("Project", back_populates="user_associations")

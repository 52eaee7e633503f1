from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class Project(Base):
    """
    사용자들이 소속되는 작업 공간을 나타냅니다.
    사용자 관리 로직은 프로젝트의 id와 소속 관계 외에는 관여하지 않습니다.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), unique=True, nullable=False, index=True)

    user_associations = relationship("UserProject", back_populates="project", cascade="all, delete-orphan")

import enum

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base


class RuleLevel(enum.IntEnum):
    """사용자가 알림을 받을 규칙의 최소 레벨입니다."""
    LOW = 0
    MEDIUM = 1
    HIGH = 2


class User(Base):
    """
    관리 API가 다루는 사용자(알림 수신자)를 나타냅니다.
    사용자는 여러 프로젝트에 소속될 수 있으며(다대다), universal 사용자는
    명시적 소속과 관계없이 모든 프로젝트를 볼 수 있습니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(32), unique=True, nullable=False, index=True)
    email = Column(String, nullable=False, default="")
    enable_email = Column(Boolean, nullable=False, default=True)
    phone = Column(String, nullable=False, default="")
    enable_phone = Column(Boolean, nullable=False, default=True)
    universal = Column(Boolean, nullable=False, default=False)
    rule_level = Column(Integer, nullable=False, default=int(RuleLevel.LOW))

    project_associations = relationship("UserProject", back_populates="user", cascade="all, delete-orphan")

from .user import User, RuleLevel
from .project import Project
from .association import UserProject

__all__ = ["User", "RuleLevel", "Project", "UserProject"]

from .user import IUserRepository
from .project import IProjectRepository

__all__ = ["IUserRepository", "IProjectRepository"]

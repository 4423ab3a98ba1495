"""Narrow persistence interfaces for users, projects and collected emails."""

from .project_emails import ProjectEmailRepository
from .projects import ProjectRepository
from .users import UserRepository

__all__ = ["ProjectEmailRepository", "ProjectRepository", "UserRepository"]

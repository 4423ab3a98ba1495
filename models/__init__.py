"""Database initialization and model exports."""

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .project import Project, ProjectEmail  # noqa: E402,F401

__all__ = [
    "db",
    "User",
    "Project",
    "ProjectEmail",
]

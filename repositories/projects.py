"""Project persistence."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from models.project import Project


class ProjectRepository:
    """Reads and writes ``projects`` rows. Never commits."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, project_id: int) -> Project | None:
        return self.session.get(Project, project_id)

    def get_owned(self, project_id: int, owner_id: int) -> Project | None:
        stmt = select(Project).where(Project.id == project_id, Project.user_id == owner_id)
        return self.session.scalars(stmt).first()

    def list_owned(self, owner_id: int) -> list[Project]:
        stmt = (
            select(Project)
            .where(Project.user_id == owner_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
        )
        return list(self.session.scalars(stmt))

    def add(self, project: Project) -> Project:
        self.session.add(project)
        return project

    def delete_owned(self, project_id: int, owner_id: int) -> int:
        """Delete the project only if ``owner_id`` owns it; return rows deleted."""

        result = self.session.execute(
            delete(Project)
            .where(Project.id == project_id, Project.user_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_for_user(self, user_id: int) -> int:
        result = self.session.execute(
            delete(Project)
            .where(Project.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

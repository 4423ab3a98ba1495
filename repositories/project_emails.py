"""Collected email persistence."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from models.project import Project, ProjectEmail


class ProjectEmailRepository:
    """Reads and writes ``project_emails`` rows. Never commits."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, project_id: int, email: str) -> bool:
        stmt = select(ProjectEmail.id).where(
            ProjectEmail.project_id == project_id, ProjectEmail.email == email
        )
        return self.session.scalars(stmt).first() is not None

    def list_for_project(self, project_id: int) -> list[ProjectEmail]:
        stmt = (
            select(ProjectEmail)
            .where(ProjectEmail.project_id == project_id)
            .order_by(ProjectEmail.added_at.asc(), ProjectEmail.id.asc())
        )
        return list(self.session.scalars(stmt))

    def add(self, record: ProjectEmail) -> ProjectEmail:
        self.session.add(record)
        return record

    def delete(self, email_id: int, project_id: int) -> int:
        result = self.session.execute(
            delete(ProjectEmail)
            .where(ProjectEmail.id == email_id, ProjectEmail.project_id == project_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_for_owned_project(self, project_id: int, owner_id: int) -> int:
        """Delete a project's emails, only when ``owner_id`` owns the project."""

        owned = select(Project.id).where(
            Project.id == project_id, Project.user_id == owner_id
        )
        result = self.session.execute(
            delete(ProjectEmail)
            .where(ProjectEmail.project_id.in_(owned))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_for_user(self, user_id: int) -> int:
        owned = select(Project.id).where(Project.user_id == user_id)
        result = self.session.execute(
            delete(ProjectEmail)
            .where(ProjectEmail.project_id.in_(owned))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

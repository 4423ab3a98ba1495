"""Projects and their collected email addresses."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from models import db
from models.project import Project, ProjectEmail
from repositories import ProjectEmailRepository, ProjectRepository
from utils.errors import DuplicateEmail, EmailNotFound, NotFoundOrNotOwned, ProjectNotFound

logger = logging.getLogger(__name__)


def create_project(owner_id: int, name: str, description: str | None = None) -> Project:
    project = Project(user_id=owner_id, name=name, description=description or None)
    ProjectRepository(db.session).add(project)
    db.session.commit()
    return project


def list_projects(owner_id: int) -> list[Project]:
    return ProjectRepository(db.session).list_owned(owner_id)


def _require_owned(project_id: int, owner_id: int) -> Project:
    project = ProjectRepository(db.session).get_owned(project_id, owner_id)
    if project is None:
        raise NotFoundOrNotOwned()
    return project


def add_email(project_id: int, email: str) -> ProjectEmail:
    """Collect ``email`` into a project. Open to unauthenticated callers."""

    if ProjectRepository(db.session).get(project_id) is None:
        raise ProjectNotFound()

    emails = ProjectEmailRepository(db.session)
    if emails.exists(project_id, email):
        raise DuplicateEmail("Email already added to this project.")

    record = emails.add(ProjectEmail(project_id=project_id, email=email))
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise DuplicateEmail("Email already added to this project.") from exc
    return record


def list_emails(project_id: int, owner_id: int) -> list[ProjectEmail]:
    _require_owned(project_id, owner_id)
    return ProjectEmailRepository(db.session).list_for_project(project_id)


def delete_email(project_id: int, email_id: int, owner_id: int) -> None:
    _require_owned(project_id, owner_id)
    if ProjectEmailRepository(db.session).delete(email_id, project_id) == 0:
        db.session.rollback()
        raise EmailNotFound()
    db.session.commit()
    logger.info("Removed email %s from project %s", email_id, project_id)

"""All-or-nothing deletes across users, projects and collected emails."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db
from repositories import ProjectEmailRepository, ProjectRepository, UserRepository
from utils.errors import InternalError, NotFoundOrNotOwned, ResourceNotFound

logger = logging.getLogger(__name__)


def delete_user(user_id: int) -> None:
    """Delete a user's project emails, then projects, then the user."""

    session = db.session
    try:
        emails = ProjectEmailRepository(session).delete_for_user(user_id)
        projects = ProjectRepository(session).delete_for_user(user_id)
        if UserRepository(session).delete(user_id) == 0:
            session.rollback()
            raise ResourceNotFound("User not found.")
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Deleting user %s failed; rolled back", user_id)
        raise InternalError() from exc

    logger.info(
        "Deleted user %s with %s projects and %s emails", user_id, projects, emails
    )


def delete_project(project_id: int, owner_id: int) -> None:
    """Delete a project and its emails if ``owner_id`` owns it.

    Ownership is enforced by the DELETE statements themselves; a zero row
    count on the project delete rolls back the email delete too.
    """

    session = db.session
    try:
        emails = ProjectEmailRepository(session).delete_for_owned_project(
            project_id, owner_id
        )
        if ProjectRepository(session).delete_owned(project_id, owner_id) == 0:
            session.rollback()
            raise NotFoundOrNotOwned()
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Deleting project %s failed; rolled back", project_id)
        raise InternalError() from exc

    logger.info("Deleted project %s with %s emails", project_id, emails)

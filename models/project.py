"""Project and collected email models."""

from . import db
from .user import EMAIL_MAX_LENGTH, utcnow

PROJECT_NAME_MAX_LENGTH = 200


class Project(db.Model):
    """An email-collection list owned by a single user."""

    __tablename__ = "projects"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    name = db.Column(db.String(PROJECT_NAME_MAX_LENGTH), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    owner = db.relationship("User", back_populates="projects")
    emails = db.relationship("ProjectEmail", back_populates="project", lazy="dynamic")

    def to_dict(self) -> dict:
        """Serialize the project."""

        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class ProjectEmail(db.Model):
    """An email address collected into a project."""

    __tablename__ = "project_emails"
    __table_args__ = (
        db.UniqueConstraint("project_id", "email", name="uq_project_emails_project_email"),
    )

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(
        db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True
    )
    email = db.Column(db.String(EMAIL_MAX_LENGTH), nullable=False)
    added_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    project = db.relationship("Project", back_populates="emails")

    def to_dict(self) -> dict:
        """Serialize the collected email."""

        return {
            "id": self.id,
            "project_id": self.project_id,
            "email": self.email,
            "added_at": self.added_at.isoformat() if self.added_at else None,
        }

"""Projects blueprint: owner-managed email collection lists."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from models.project import PROJECT_NAME_MAX_LENGTH
from models.user import EMAIL_MAX_LENGTH
from services import cascade, projects
from utils.auth import current_user_id
from utils.request_validation import (
    check_max_length,
    clean_string,
    normalize_email,
    parse_json_request,
)

projects_bp = Blueprint("projects", __name__)


@projects_bp.route("", methods=["GET"])
@jwt_required()
def list_projects():
    """Return the caller's projects, newest first."""

    owned = projects.list_projects(current_user_id())
    return jsonify({"results": [project.to_dict() for project in owned], "count": len(owned)})


@projects_bp.route("", methods=["POST"])
@jwt_required()
def create_project():
    """Create a project owned by the caller."""

    data = parse_json_request(request, required_keys=("name",))
    name = check_max_length("name", clean_string(data.get("name")), PROJECT_NAME_MAX_LENGTH)
    description = clean_string(data.get("description")) or None

    project = projects.create_project(current_user_id(), name, description)
    return jsonify({"project": project.to_dict()}), HTTPStatus.CREATED


@projects_bp.route("/<int:project_id>", methods=["DELETE"])
@jwt_required()
def delete_project(project_id: int):
    """Delete a project and every email collected into it."""

    cascade.delete_project(project_id, current_user_id())
    return jsonify({"message": "Project deleted successfully."})


@projects_bp.route("/<int:project_id>/emails", methods=["POST"])
def add_project_email(project_id: int):
    """Public signup endpoint: collect an email address into a project."""

    data = parse_json_request(request, required_keys=("email",))
    email = check_max_length("email", normalize_email(data.get("email")), EMAIL_MAX_LENGTH)
    record = projects.add_email(project_id, email)
    return jsonify({"email": record.to_dict()}), HTTPStatus.CREATED


@projects_bp.route("/<int:project_id>/emails", methods=["GET"])
@jwt_required()
def list_project_emails(project_id: int):
    """Return every email collected into one of the caller's projects."""

    records = projects.list_emails(project_id, current_user_id())
    return jsonify({"results": [record.to_dict() for record in records], "count": len(records)})


@projects_bp.route("/<int:project_id>/emails/<int:email_id>", methods=["DELETE"])
@jwt_required()
def delete_project_email(project_id: int, email_id: int):
    """Remove one collected email from one of the caller's projects."""

    projects.delete_email(project_id, email_id, current_user_id())
    return jsonify({"message": "Email deleted successfully."})

"""Tests for bearer-token enforcement on protected endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest
from flask_jwt_extended import create_access_token

from models import db
from models.project import Project
from models.user import User
from services.sessions import issue_session


def _create_user(username: str = "gate") -> int:
    user = User(username=username, email=f"{username}@example.com", is_verified=True)
    user.set_password("Secret123")
    db.session.add(user)
    db.session.commit()
    return user.id


def _forged_token(user_id: int) -> str:
    now = datetime.now(UTC)
    return pyjwt.encode(
        {"sub": str(user_id), "type": "access", "iat": now, "exp": now + timedelta(hours=1)},
        "some-other-secret-that-is-long-enough-for-hs256",
        algorithm="HS256",
    )


def _without_request_id(payload: dict) -> dict:
    return {key: value for key, value in payload.items() if key != "request_id"}


def test_missing_header_is_rejected(client):
    response = client.get("/projects")

    assert response.status_code == 401
    assert response.get_json()["code"] == "missing_credentials"
    assert response.get_json()["request_id"]


@pytest.mark.parametrize("header", ["Basic dXNlcjpwYXNz", "token abc"])
def test_non_bearer_header_counts_as_missing(client, header):
    response = client.get("/projects", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.get_json()["code"] == "missing_credentials"


@pytest.mark.parametrize("header", ["Bearer", "Bearer not.a.jwt", "Bearer two parts"])
def test_malformed_bearer_is_invalid(client, header):
    response = client.get("/projects", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.get_json()["code"] == "invalid_credentials"


def test_expired_and_forged_tokens_look_the_same(app, client):
    with app.app_context():
        user_id = _create_user()
        expired = create_access_token(
            identity=str(user_id), expires_delta=timedelta(seconds=-1)
        )
    forged = _forged_token(user_id)

    expired_response = client.get(
        "/projects", headers={"Authorization": f"Bearer {expired}"}
    )
    forged_response = client.get(
        "/projects", headers={"Authorization": f"Bearer {forged}"}
    )

    assert expired_response.status_code == forged_response.status_code == 401
    expired_payload = _without_request_id(expired_response.get_json())
    assert expired_payload == _without_request_id(forged_response.get_json())
    assert expired_payload["code"] == "invalid_credentials"


def test_token_for_unknown_subject_is_invalid(app, client):
    with app.app_context():
        not_numeric = create_access_token(identity="alice")
        never_existed = create_access_token(identity="9999")

    for token in (not_numeric, never_existed):
        response = client.get("/projects", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.get_json()["code"] == "invalid_credentials"


def test_valid_token_reaches_view(app, client):
    with app.app_context():
        user_id = _create_user()
        token = issue_session(user_id).access_token

    response = client.get("/projects", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json() == {"results": [], "count": 0}


def test_token_of_deleted_account_cannot_create_projects(app, client):
    with app.app_context():
        user_id = _create_user()
        token = issue_session(user_id).access_token
    headers = {"Authorization": f"Bearer {token}"}

    assert client.delete("/auth/account", headers=headers).status_code == 200
    response = client.post("/projects", json={"name": "orphan"}, headers=headers)

    assert response.status_code == 401
    assert response.get_json()["code"] == "invalid_credentials"
    with app.app_context():
        assert Project.query.count() == 0
        assert db.session.get(User, user_id) is None


def test_issued_session_lasts_one_hour(app):
    with app.app_context():
        session = issue_session(42)

    assert session.expires_in == 3600
    assert session.to_dict()["token_type"] == "Bearer"

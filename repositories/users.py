"""User persistence."""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from models.user import User


class UserRepository:
    """Reads and writes ``users`` rows. Never commits."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def find_by_email(self, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.session.scalars(stmt).first()

    def find_by_username(self, username: str) -> User | None:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def find_by_identifier(self, identifier: str) -> User | None:
        """Look up by email when the identifier contains ``@``, else by username."""

        if "@" in identifier:
            return self.find_by_email(identifier)
        return self.find_by_username(identifier)

    def add(self, user: User) -> User:
        self.session.add(user)
        return user

    def consume_verification_token(self, token: str) -> User | None:
        """Mark the holder of ``token`` verified and clear the token.

        The conditional UPDATE decides the outcome, so two concurrent
        consumptions of the same token cannot both succeed.
        """

        holder = self.session.scalars(
            select(User).where(User.verification_token == token)
        ).first()
        if holder is None:
            return None

        result = self.session.execute(
            update(User)
            .where(User.id == holder.id, User.verification_token == token)
            .values(is_verified=True, verification_token=None)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None

        self.session.refresh(holder)
        return holder

    def replace_verification_token(self, user: User, token: str) -> None:
        user.verification_token = token

    def delete(self, user_id: int) -> int:
        result = self.session.execute(delete(User).where(User.id == user_id))
        return result.rowcount

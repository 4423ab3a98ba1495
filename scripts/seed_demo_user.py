"""Seed a verified demo user with a sample project."""

from app import create_app
from models import db
from models.project import Project
from models.user import User

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "DemoPass123"


def main() -> None:
    app = create_app()
    with app.app_context():
        user = User.query.filter_by(email=DEMO_EMAIL).first()
        if user is None:
            user = User(username=DEMO_USERNAME, email=DEMO_EMAIL, is_verified=True)
            user.set_password(DEMO_PASSWORD)
            db.session.add(user)
            action = "created"
        else:
            user.is_verified = True
            user.verification_token = None
            user.set_password(DEMO_PASSWORD)
            action = "updated"
        db.session.flush()

        if user.projects.count() == 0:
            db.session.add(
                Project(
                    user_id=user.id,
                    name="Launch waitlist",
                    description="Collects emails for the product launch.",
                )
            )
        db.session.commit()
        print(f"Demo user {action}: {DEMO_EMAIL}")


if __name__ == "__main__":
    main()

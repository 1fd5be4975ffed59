"""Management script for database setup, seeding and migrations"""

from flask.cli import FlaskGroup
from flask_migrate import upgrade

from showcase import create_app
from showcase.extensions import db
from showcase.logging_config import configure_logging_for_cli
from showcase.models.user import User, UserRole
from showcase.services.generator import seed_plans as seed_generator_plans
from showcase.services.menu import seed_menu as seed_default_menu

configure_logging_for_cli()

app = create_app()
cli = FlaskGroup(create_app=lambda: app)


@cli.command("init-db")
def init_db():
    """Create all tables directly (development only; use migrations elsewhere)"""
    with app.app_context():
        db.create_all()
        print("Database initialized successfully!")


@cli.command("drop-db")
def drop_db():
    """Drop all database tables"""
    confirmation = input("Are you sure you want to drop all tables? (yes/no): ").lower()

    if confirmation == "yes":
        with app.app_context():
            db.drop_all()
            print("Database dropped successfully!")
    else:
        print("Operation cancelled.")


@cli.command("seed-plans")
def seed_plans():
    """Create the Standard and Pro website generator plans"""
    with app.app_context():
        created = seed_generator_plans()
        print(f"Generator plans seeded ({created} created).")


@cli.command("seed-menu")
def seed_menu():
    """Create the default restaurant menu categories, items and customizations"""
    with app.app_context():
        created = seed_default_menu()
        print(f"Menu seeded ({created} items created).")


@cli.command("create-admin")
def create_admin():
    """Grant the ADMIN role to a user, creating the user if needed"""
    email = input("Enter admin email: ").strip().lower()
    if not email:
        print("Email is required!")
        return

    with app.app_context():
        user = User.query.filter_by(email=email).first()
        if user is None:
            user = User(email=email)
            db.session.add(user)
        user.role = UserRole.ADMIN.value
        db.session.commit()
        print(f"Admin user ready: {email}")


@cli.command("migrate-db")
def migrate_db():
    """Apply any pending database migrations"""
    print("Applying database migrations...")

    with app.app_context():
        upgrade()
        print("Database migrations applied successfully!")


if __name__ == "__main__":
    cli()

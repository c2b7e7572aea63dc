import click
from flask import current_app

from wedding_cms.extensions import db
from wedding_cms.models.admin_user import AdminUser
from wedding_cms.domain.pages import EDITABLE_PAGES
from wedding_cms.application.content.store import ContentStore


def register_commands(app):
    @app.cli.command("create-admin")
    @click.argument("email")
    @click.password_option()
    def create_admin(email, password):
        """Create (or reactivate) an admin account."""
        user = AdminUser.query.filter_by(email=email).first()
        if user is None:
            user = AdminUser()
            user.email = email
            db.session.add(user)

        user.role = "admin"
        user.is_active = True
        user.set_password(password)
        db.session.commit()

        current_app.logger.info("admin account ready: %s", email)
        click.echo(f"Admin {email} ready.")

    @app.cli.command("seed-content")
    def seed_content():
        """Insert an empty value for every editable content key that is missing."""
        store = ContentStore()
        keys = [key for page in EDITABLE_PAGES for key in page.content_keys]
        existing = store.get_many(keys)

        created = 0
        for key in keys:
            if key not in existing:
                store.upsert(key, "[]" if key.endswith(("_items", "_data", "_hotels", "_tips")) else "")
                created += 1

        click.echo(f"Seeded {created} content key(s).")

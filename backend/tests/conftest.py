import pytest

from wedding_cms import create_app
from wedding_cms.extensions import db as _db
from wedding_cms.models.admin_user import AdminUser
from wedding_cms.application.content.store import ContentStore
from wedding_cms.application.drafts.manager import DraftManager
from wedding_cms.application.session import AdminSession


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(db):
    user = AdminUser()
    user.email = "admin@example.com"
    user.role = "admin"
    user.set_password("s3cret-pass")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin_session(admin_user):
    return AdminSession.from_user(admin_user)


@pytest.fixture
def content_store(app, admin_session):
    return ContentStore(admin_session)


@pytest.fixture
def draft_manager(app, admin_session, content_store):
    return DraftManager(admin_session, content_store)


@pytest.fixture
def auth_headers(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "admin@example.com", "password": "s3cret-pass"},
    )
    token = response.get_json()["access_token"]
    return {"Authorization": f"Bearer {token}"}

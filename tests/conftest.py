import pytest

from library_admin import create_app
from library_admin.config import TestConfig
from library_admin.extensions import db
from library_admin.services.auth_service import AuthService
from library_admin.services.book_service import BookService
from library_admin.services.student_service import StudentService

ADMIN_EMAIL = "admin@library.local"
ADMIN_PASSWORD = "adminpass"
USER_EMAIL = "user@library.local"
USER_PASSWORD = "userpass"


@pytest.fixture
def app(tmp_path):
    # Her test için ayrı bir sqlite dosyası
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'test.db'}"

    app = create_app(_Config)
    with app.app_context():
        admin = AuthService.register(ADMIN_EMAIL, ADMIN_PASSWORD)
        AuthService.grant_admin(admin)
        AuthService.register(USER_EMAIL, USER_PASSWORD)

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.test_request_context():
        yield


@pytest.fixture
def admin_client(client):
    r = client.post("/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 302
    return client


@pytest.fixture
def admin_headers(client):
    r = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.get_json()['access_token']}"}


@pytest.fixture
def user_headers(client):
    r = client.post("/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.get_json()['access_token']}"}


@pytest.fixture
def make_student(app):
    def _make(**overrides):
        data = {"name": "Ada Lovelace", "email": "ada@example.com", "branch": "CS", "semester": 3}
        data.update(overrides)
        with app.app_context():
            return StudentService.create_student(data).id
    return _make


@pytest.fixture
def make_book(app):
    def _make(**overrides):
        data = {"title": "Dune", "author": "Frank Herbert", "quantity": 3, "available_quantity": 3}
        data.update(overrides)
        with app.app_context():
            return BookService.create_book(data).id
    return _make

import pytest

from library_admin import create_app
from library_admin.errors import ConflictError, ValidationError
from library_admin.repositories.user_repo import UserRepo
from library_admin.services.auth_service import AuthService
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, USER_EMAIL, USER_PASSWORD


def test_allow_list_decides_admin(ctx):
    assert AuthService.is_admin(UserRepo.get_by_email(ADMIN_EMAIL).id)
    assert not AuthService.is_admin(UserRepo.get_by_email(USER_EMAIL).id)
    assert not AuthService.is_admin(None)


def test_register_rejects_duplicates(ctx):
    with pytest.raises(ConflictError):
        AuthService.register(ADMIN_EMAIL.upper(), "whatever")
    with pytest.raises(ValidationError):
        AuthService.register("", "pw")


def test_wrong_password(ctx):
    with pytest.raises(ValidationError):
        AuthService.authenticate(ADMIN_EMAIL, "nope")


def test_grant_admin_is_idempotent(ctx):
    user = UserRepo.get_by_email(USER_EMAIL)
    first = AuthService.grant_admin(user)
    assert AuthService.grant_admin(user).id == first.id
    assert AuthService.is_admin(user.id)


def test_login_page_for_anonymous(client):
    r = client.get("/borrow")
    assert r.status_code == 200
    assert b"Library Admin Login" in r.data
    assert b"Borrow Management" not in r.data


def test_non_admin_sees_login_page(client):
    r = client.post("/login", data={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert r.status_code == 200
    assert b"Admin access required." in r.data

    r = client.get("/students")
    assert b"Library Admin Login" in r.data


def test_admin_reaches_management_views(client):
    r = client.post("/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/borrow")

    r = client.get("/borrow")
    assert r.status_code == 200
    assert b"Borrow Management" in r.data
    assert ADMIN_EMAIL.encode() in r.data


def test_logout_clears_session(admin_client):
    r = admin_client.get("/logout")
    assert r.status_code == 302
    r = admin_client.get("/borrow")
    assert b"Library Admin Login" in r.data


def test_register_page_creates_non_admin(client, app):
    r = client.post("/register", data={"email": "new@library.local", "password": "secret1"})
    assert r.status_code == 302
    with app.app_context():
        user = UserRepo.get_by_email("new@library.local")
        assert user is not None
        assert not AuthService.is_admin(user.id)


def test_injected_admin_policy(tmp_path):
    from library_admin.config import TestConfig

    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'policy.db'}"

    class Nobody:
        def is_admin(self, user_id):
            return False

    app = create_app(_Config, admin_policy=Nobody())
    with app.app_context():
        AuthService.grant_admin(AuthService.register(ADMIN_EMAIL, ADMIN_PASSWORD))

    client = app.test_client()
    r = client.post("/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert b"Admin access required." in r.data


def test_api_login_and_me(client, admin_headers):
    r = client.get("/auth/me", headers=admin_headers)
    assert r.status_code == 200
    assert r.get_json()["user"] == {"id": 1, "email": ADMIN_EMAIL, "is_admin": True}


def test_api_bad_login(client):
    r = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "bad"})
    assert r.status_code == 401
    assert r.get_json()["success"] is False


def test_api_requires_token(client):
    r = client.get("/api/books/")
    assert r.status_code == 401
    body = r.get_json()
    assert body["success"] is False
    assert body["message"].startswith("Unauthorized")


def test_api_rejects_garbage_token(client):
    r = client.get("/api/books/", headers={"Authorization": "Bearer not.a.token"})
    assert r.status_code == 401
    assert r.get_json()["success"] is False


def test_api_non_admin_is_forbidden(client, user_headers):
    r = client.get("/api/students/", headers=user_headers)
    assert r.status_code == 403

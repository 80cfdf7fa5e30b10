from flask import current_app, session
from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash, generate_password_hash

from library_admin.errors import ConflictError, ValidationError
from library_admin.models.admin_user import AdminUser
from library_admin.models.user import User
from library_admin.repositories.admin_repo import AdminRepo
from library_admin.repositories.user_repo import UserRepo


class AdminPolicy:
    """Answers "may this user use the management views?".

    The default looks the user up in the ``admin_users`` allow-list. The app
    keeps one instance in ``app.extensions["admin_policy"]``; pass another
    object with an ``is_admin(user_id)`` method to ``create_app`` to swap it.
    """

    def is_admin(self, user_id) -> bool:
        if user_id is None:
            return False
        return AdminRepo.get_by_user_id(int(user_id)) is not None


def admin_policy() -> AdminPolicy:
    return current_app.extensions["admin_policy"]


class AuthService:
    @staticmethod
    def register(email: str, password: str):
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("Email and password are required")
        if UserRepo.get_by_email(email):
            raise ConflictError("This email is already registered")

        user = User(email=email, password_hash=generate_password_hash(password))
        UserRepo.create(user)
        current_app.logger.info(f"[auth] registered user id={user.id}")
        return user

    @staticmethod
    def authenticate(email: str, password: str):
        user = UserRepo.get_by_email((email or "").strip().lower())
        if not user or not check_password_hash(user.password_hash, password or ""):
            current_app.logger.warning("[auth] failed login attempt")
            raise ValidationError("Invalid email or password")
        return user

    @staticmethod
    def is_admin(user_id) -> bool:
        return admin_policy().is_admin(user_id)

    @staticmethod
    def grant_admin(user: User):
        entry = AdminRepo.get_by_user_id(user.id)
        if entry:
            return entry
        entry = AdminRepo.create(AdminUser(user_id=user.id))
        current_app.logger.info(f"[auth] user id={user.id} added to admin allow-list")
        return entry

    # -----------------------------
    # Web session
    # -----------------------------
    @staticmethod
    def sign_in(email: str, password: str):
        user = AuthService.authenticate(email, password)
        session.clear()
        session["user_id"] = int(user.id)
        session["email"] = user.email
        return user

    @staticmethod
    def sign_out():
        session.clear()

    @staticmethod
    def current_user():
        user_id = session.get("user_id")
        if not user_id:
            return None
        return UserRepo.get_by_id(int(user_id))

    # -----------------------------
    # JSON API
    # -----------------------------
    @staticmethod
    def login_token(email: str, password: str):
        user = AuthService.authenticate(email, password)
        token = create_access_token(
            identity=str(user.id),
            additional_claims={"email": user.email, "is_admin": AuthService.is_admin(user.id)},
        )
        return token, user

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity

from library_admin.controllers import json_error
from library_admin.errors import LibraryError
from library_admin.repositories.user_repo import UserRepo
from library_admin.services.auth_service import AuthService

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register", endpoint="auth_register")
def register():
    data = request.get_json(silent=True) or {}
    try:
        # yeni kullanıcı admin değildir; allow-list'e CLI ile eklenir
        user = AuthService.register(data.get("email"), data.get("password"))
        return jsonify({"success": True, "id": user.id, "email": user.email}), 201
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    try:
        token, user = AuthService.login_token(data.get("email"), data.get("password"))
        return jsonify({
            "success": True,
            "access_token": token,
            "user": {"id": user.id, "email": user.email, "is_admin": AuthService.is_admin(user.id)}
        })
    except LibraryError as e:
        return json_error(str(e), 401)


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    user = UserRepo.get_by_id(int(get_jwt_identity()))
    if not user:
        return json_error("User not found", 404)
    return jsonify({
        "success": True,
        "user": {"id": user.id, "email": user.email, "is_admin": AuthService.is_admin(user.id)}
    })

from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from library_admin.services.auth_service import AuthService


def admin_required(fn):
    """JSON API: geçerli JWT + allow-list kontrolü (claim'e güvenme, her istekte sor)."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        if not AuthService.is_admin(get_jwt_identity()):
            return jsonify({"success": False, "message": "Admin access required"}), 403
        return fn(*args, **kwargs)
    return wrapper

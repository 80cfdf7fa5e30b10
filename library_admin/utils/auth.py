from functools import wraps
from flask import flash, g, render_template, session

from library_admin.services.auth_service import AuthService


def admin_required(view):
    """Web UI kapısı: oturum yoksa ya da kullanıcı allow-list'te değilse login sayfası."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        user = AuthService.current_user()
        if user is None:
            session.clear()
            return render_template("login.html")
        if not AuthService.is_admin(user.id):
            flash("Admin access required.", "danger")
            return render_template("login.html", email=user.email)
        g.user = user
        return view(*args, **kwargs)
    return wrapped

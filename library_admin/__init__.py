from flask import Flask, jsonify
from library_admin.config import Config
from library_admin.extensions import db, migrate, jwt

from library_admin.controllers.web_controller import web_bp
from library_admin.services.auth_service import AdminPolicy


def create_app(config_object=Config, admin_policy=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) Önce db init (db.engine / db.session için şart)
    db.init_app(app)

    # 2) Diğer extension'lar
    migrate.init_app(app, db)
    jwt.init_app(app)
    _register_jwt_errors()

    # 3) Admin kontrolü: dışarıdan verilebilir, yoksa admin_users tablosu
    app.extensions["admin_policy"] = admin_policy or AdminPolicy()

    # 4) Web/UI blueprint
    app.register_blueprint(web_bp)

    # 5) API blueprintleri
    from library_admin.controllers.auth_controller import auth_bp
    from library_admin.controllers.student_controller import student_bp
    from library_admin.controllers.book_controller import book_bp
    from library_admin.controllers.borrow_controller import borrow_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(student_bp, url_prefix="/api/students")
    app.register_blueprint(book_bp, url_prefix="/api/books")
    app.register_blueprint(borrow_bp, url_prefix="/api/borrows")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from library_admin.cli import register_commands
    register_commands(app)

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            import library_admin.models  # noqa: F401  (tabloları metadata'ya kaydet)
            db.create_all()

    return app


def _register_jwt_errors():
    # JWT hataları da {"success": false, "message": ...} formatında dönsün
    from library_admin.controllers import json_error

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return json_error(f"Unauthorized: {reason}", 401)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return json_error(f"Invalid token: {reason}", 401)

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return json_error("Token has expired", 401)

from library_admin.extensions import db
from library_admin.utils.clock import utcnow


class AdminUser(db.Model):
    """Admin allow-list: a row here is the only thing that grants admin rights."""

    __tablename__ = "admin_users"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", backref=db.backref("admin_entry", uselist=False))

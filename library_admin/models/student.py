from library_admin.extensions import db
from library_admin.utils.clock import utcnow


class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(32), nullable=True)
    branch = db.Column(db.String(100), nullable=False)
    semester = db.Column(db.Integer, nullable=False, default=1)  # 1..8

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

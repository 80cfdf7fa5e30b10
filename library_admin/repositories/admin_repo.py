from library_admin.models.admin_user import AdminUser
from library_admin.extensions import db


class AdminRepo:
    @staticmethod
    def get_by_user_id(user_id: int):
        return AdminUser.query.filter_by(user_id=user_id).first()

    @staticmethod
    def create(entry: AdminUser):
        db.session.add(entry)
        db.session.commit()
        return entry

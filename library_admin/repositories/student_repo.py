from library_admin.models.student import Student
from library_admin.extensions import db


class StudentRepo:
    @staticmethod
    def list_all():
        return Student.query.order_by(Student.created_at.desc(), Student.id.desc()).all()

    @staticmethod
    def list_by_name():
        return Student.query.order_by(Student.name).all()

    @staticmethod
    def get(student_id: int):
        return db.session.get(Student, student_id)

    @staticmethod
    def create(student: Student):
        db.session.add(student)
        db.session.commit()
        return student

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(student: Student):
        db.session.delete(student)
        db.session.commit()

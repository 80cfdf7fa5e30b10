from flask import current_app

from library_admin.errors import ConflictError, NotFoundError
from library_admin.models.student import Student
from library_admin.repositories.borrow_repo import BorrowRepo
from library_admin.repositories.student_repo import StudentRepo
from library_admin.utils.forms import optional_str, parse_int, required_str

MIN_SEMESTER = 1
MAX_SEMESTER = 8


class StudentService:
    FIELDS = ("name", "email", "phone", "branch", "semester")

    @staticmethod
    def _clean(data: dict) -> dict:
        return {
            "name": required_str(data, "name", "Name"),
            "email": required_str(data, "email", "Email"),
            "phone": optional_str(data, "phone"),
            "branch": required_str(data, "branch", "Branch"),
            "semester": parse_int(data, "semester", "Semester", default=MIN_SEMESTER,
                                  min_value=MIN_SEMESTER, max_value=MAX_SEMESTER),
        }

    @staticmethod
    def list_students():
        return StudentRepo.list_all()

    @staticmethod
    def list_students_by_name():
        return StudentRepo.list_by_name()

    @staticmethod
    def get_student(student_id: int):
        student = StudentRepo.get(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    @staticmethod
    def create_student(data: dict):
        student = Student(**StudentService._clean(data))
        StudentRepo.create(student)
        current_app.logger.info(f"[students] created id={student.id}")
        return student

    @staticmethod
    def update_student(student_id: int, data: dict):
        student = StudentService.get_student(student_id)
        merged = {k: getattr(student, k) for k in StudentService.FIELDS}
        merged.update(data)
        for k, v in StudentService._clean(merged).items():
            setattr(student, k, v)
        StudentRepo.update()
        current_app.logger.info(f"[students] updated id={student.id}")
        return student

    @staticmethod
    def delete_student(student_id: int):
        student = StudentService.get_student(student_id)
        # borrow kayıtları silinmez; referans varsa öğrenci de silinemez
        if BorrowRepo.count_for_student(student_id) > 0:
            current_app.logger.warning(f"[students] delete refused, id={student_id} has borrow records")
            raise ConflictError("This student has borrow records and cannot be deleted.")
        StudentRepo.delete(student)
        current_app.logger.info(f"[students] deleted id={student_id}")

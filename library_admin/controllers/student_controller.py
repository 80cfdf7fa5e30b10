from flask import Blueprint, request, jsonify

from library_admin.controllers import json_error, student_json
from library_admin.errors import LibraryError
from library_admin.services.student_service import StudentService
from library_admin.utils.decorators import admin_required

student_bp = Blueprint("students_api", __name__)


@student_bp.get("/")
@admin_required
def list_students():
    return jsonify({"success": True, "data": [student_json(s) for s in StudentService.list_students()]})


@student_bp.get("/<int:student_id>")
@admin_required
def get_student(student_id: int):
    try:
        return jsonify({"success": True, "data": student_json(StudentService.get_student(student_id))})
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@student_bp.post("/")
@admin_required
def create_student():
    data = request.get_json(silent=True) or {}
    try:
        s = StudentService.create_student(data)
        return jsonify({"success": True, "data": student_json(s)}), 201
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@student_bp.put("/<int:student_id>")
@admin_required
def update_student(student_id: int):
    data = request.get_json(silent=True) or {}
    try:
        s = StudentService.update_student(student_id, data)
        return jsonify({"success": True, "data": student_json(s)})
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@student_bp.delete("/<int:student_id>")
@admin_required
def delete_student(student_id: int):
    try:
        StudentService.delete_student(student_id)
        return jsonify({"success": True})
    except LibraryError as e:
        return json_error(str(e), e.status_code)

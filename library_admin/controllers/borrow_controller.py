from flask import Blueprint, request, jsonify

from library_admin.controllers import book_json, borrow_json, json_error, student_json
from library_admin.errors import LibraryError
from library_admin.services.book_service import BookService
from library_admin.services.borrow_service import BorrowService
from library_admin.services.student_service import StudentService
from library_admin.utils.decorators import admin_required

borrow_bp = Blueprint("borrows_api", __name__)


@borrow_bp.get("/")
@admin_required
def list_borrows():
    status = request.args.get("status")
    if status == "borrowed":
        rows = BorrowService.list_active()
    elif status == "returned":
        rows = BorrowService.list_recently_returned(request.args.get("limit", 5, type=int))
    else:
        rows = BorrowService.list_borrows()
    return jsonify({"success": True, "data": [borrow_json(x) for x in rows]})


@borrow_bp.get("/options")
@admin_required
def borrow_options():
    # yeni borrow formu için seçenekler
    return jsonify({"success": True, "data": {
        "students": [student_json(s) for s in StudentService.list_students_by_name()],
        "books": [book_json(b) for b in BookService.list_available_books()],
        "default_due_date": BorrowService.default_due_date().isoformat(),
    }})


@borrow_bp.post("/")
@admin_required
def create_borrow():
    data = request.get_json(silent=True) or {}
    try:
        b = BorrowService.create_borrow(data)
        return jsonify({"success": True, "data": borrow_json(b)}), 201
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@borrow_bp.post("/<int:borrow_id>/return")
@admin_required
def return_borrow(borrow_id: int):
    try:
        b = BorrowService.return_borrow(borrow_id)
        return jsonify({"success": True, "data": borrow_json(b)})
    except LibraryError as e:
        return json_error(str(e), e.status_code)

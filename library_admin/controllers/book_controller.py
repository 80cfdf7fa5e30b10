from flask import Blueprint, request, jsonify

from library_admin.controllers import json_error, book_json
from library_admin.errors import LibraryError
from library_admin.services.book_service import BookService
from library_admin.utils.decorators import admin_required

book_bp = Blueprint("books_api", __name__)


@book_bp.get("/")
@admin_required
def list_books():
    return jsonify({"success": True, "data": [book_json(b) for b in BookService.list_books()]})


@book_bp.get("/<int:book_id>")
@admin_required
def get_book(book_id: int):
    try:
        return jsonify({"success": True, "data": book_json(BookService.get_book(book_id))})
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@book_bp.post("/")
@admin_required
def create_book():
    data = request.get_json(silent=True) or {}
    try:
        b = BookService.create_book(data)
        return jsonify({"success": True, "data": book_json(b)}), 201
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@book_bp.put("/<int:book_id>")
@admin_required
def update_book(book_id: int):
    data = request.get_json(silent=True) or {}
    try:
        b = BookService.update_book(book_id, data)
        return jsonify({"success": True, "data": book_json(b)})
    except LibraryError as e:
        return json_error(str(e), e.status_code)


@book_bp.delete("/<int:book_id>")
@admin_required
def delete_book(book_id: int):
    try:
        BookService.delete_book(book_id)
        return jsonify({"success": True})
    except LibraryError as e:
        return json_error(str(e), e.status_code)

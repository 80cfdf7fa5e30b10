from flask import jsonify


def json_error(message, code=400):
    return jsonify({"success": False, "message": message}), code


def _iso(value):
    return value.isoformat() if value else None


def student_json(s):
    return {
        "id": s.id,
        "name": s.name,
        "email": s.email,
        "phone": s.phone,
        "branch": s.branch,
        "semester": s.semester,
        "created_at": _iso(s.created_at),
    }


def book_json(b):
    return {
        "id": b.id,
        "title": b.title,
        "author": b.author,
        "isbn": b.isbn,
        "quantity": b.quantity,
        "available_quantity": b.available_quantity,
        "created_at": _iso(b.created_at),
    }


def borrow_json(x, with_details=True):
    data = {
        "id": x.id,
        "student_id": x.student_id,
        "book_id": x.book_id,
        "borrow_date": _iso(x.borrow_date),
        "due_date": _iso(x.due_date),
        "return_date": _iso(x.return_date),
        "status": x.status,
        "overdue": x.is_overdue(),
        "created_at": _iso(x.created_at),
    }
    if with_details:
        data["student"] = student_json(x.student) if x.student else None
        data["book"] = book_json(x.book) if x.book else None
    return data

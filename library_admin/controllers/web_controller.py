from flask import Blueprint, render_template, request, redirect, url_for, flash, g

from library_admin.controllers import book_json, student_json
from library_admin.errors import LibraryError
from library_admin.services.auth_service import AuthService
from library_admin.services.book_service import BookService
from library_admin.services.borrow_service import BorrowService
from library_admin.services.student_service import StudentService
from library_admin.utils.auth import admin_required
from library_admin.utils.clock import today

web_bp = Blueprint("web", __name__)


@web_bp.get("/")
@admin_required
def root():
    return redirect(url_for("web.borrow_page"))


# -----------------------------
# Auth
# -----------------------------
@web_bp.route("/login", methods=["GET", "POST"])
def login_page():
    if request.method == "GET":
        user = AuthService.current_user()
        if user and AuthService.is_admin(user.id):
            return redirect(url_for("web.borrow_page"))
        return render_template("login.html")

    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""

    try:
        user = AuthService.sign_in(email, password)
    except LibraryError as e:
        flash(str(e), "danger")
        return render_template("login.html", email=email)

    # giriş başarılı ama allow-list'te yoksa yönetim ekranı açılmaz
    if not AuthService.is_admin(user.id):
        flash("Admin access required.", "danger")
        return render_template("login.html", email=email)

    return redirect(url_for("web.borrow_page"))


@web_bp.route("/register", methods=["GET", "POST"])
def register_page():
    if request.method == "GET":
        return render_template("register.html")

    email = (request.form.get("email") or "").strip()
    try:
        AuthService.register(email, request.form.get("password") or "")
    except LibraryError as e:
        flash(str(e), "danger")
        return render_template("register.html", email=email)

    flash("Account created. An administrator must grant access before you can sign in.", "success")
    return redirect(url_for("web.login_page"))


@web_bp.get("/logout")
def logout():
    AuthService.sign_out()
    return redirect(url_for("web.login_page"))


# -----------------------------
# Students
# -----------------------------
@web_bp.route("/students", methods=["GET", "POST"])
@admin_required
def students_page():
    if request.method == "POST":
        try:
            StudentService.create_student(request.form.to_dict())
            flash("Student added.", "success")
            return redirect(url_for("web.students_page"))
        except LibraryError as e:
            flash(str(e), "danger")
            return render_template("students.html", students=StudentService.list_students(),
                                   form=request.form, user=g.user)

    return render_template("students.html", students=StudentService.list_students(), form={}, user=g.user)


@web_bp.route("/students/<int:student_id>/edit", methods=["GET", "POST"])
@admin_required
def student_edit_page(student_id: int):
    try:
        student = StudentService.get_student(student_id)
    except LibraryError as e:
        flash(str(e), "danger")
        return redirect(url_for("web.students_page"))

    if request.method == "POST":
        try:
            StudentService.update_student(student_id, request.form.to_dict())
            flash("Student updated.", "success")
            return redirect(url_for("web.students_page"))
        except LibraryError as e:
            flash(str(e), "danger")
            return render_template("student_form.html", student=student, form=request.form, user=g.user)

    return render_template("student_form.html", student=student, form=student_json(student), user=g.user)


@web_bp.post("/students/<int:student_id>/delete")
@admin_required
def student_delete(student_id: int):
    try:
        StudentService.delete_student(student_id)
        flash("Student deleted.", "success")
    except LibraryError as e:
        flash(str(e), "danger")
    return redirect(url_for("web.students_page"))


# -----------------------------
# Books
# -----------------------------
@web_bp.route("/books", methods=["GET", "POST"])
@admin_required
def books_page():
    if request.method == "POST":
        try:
            BookService.create_book(request.form.to_dict())
            flash("Book added.", "success")
            return redirect(url_for("web.books_page"))
        except LibraryError as e:
            flash(str(e), "danger")
            return render_template("books.html", books=BookService.list_books(),
                                   form=request.form, user=g.user)

    return render_template("books.html", books=BookService.list_books(), form={}, user=g.user)


@web_bp.route("/books/<int:book_id>/edit", methods=["GET", "POST"])
@admin_required
def book_edit_page(book_id: int):
    try:
        book = BookService.get_book(book_id)
    except LibraryError as e:
        flash(str(e), "danger")
        return redirect(url_for("web.books_page"))

    if request.method == "POST":
        try:
            BookService.update_book(book_id, request.form.to_dict())
            flash("Book updated.", "success")
            return redirect(url_for("web.books_page"))
        except LibraryError as e:
            flash(str(e), "danger")
            return render_template("book_form.html", book=book, form=request.form, user=g.user)

    return render_template("book_form.html", book=book, form=book_json(book), user=g.user)


@web_bp.post("/books/<int:book_id>/delete")
@admin_required
def book_delete(book_id: int):
    try:
        BookService.delete_book(book_id)
        flash("Book deleted.", "success")
    except LibraryError as e:
        flash(str(e), "danger")
    return redirect(url_for("web.books_page"))


# -----------------------------
# Borrow
# -----------------------------
def _render_borrow_page(form):
    return render_template(
        "borrow.html",
        active=BorrowService.list_active(),
        returned=BorrowService.list_recently_returned(),
        students=StudentService.list_students_by_name(),
        books=BookService.list_available_books(),
        form=form,
        min_due_date=today().isoformat(),
        today=today(),
        user=g.user,
    )


@web_bp.route("/borrow", methods=["GET", "POST"])
@admin_required
def borrow_page():
    if request.method == "POST":
        try:
            BorrowService.create_borrow(request.form.to_dict())
            flash("Borrow created.", "success")
            return redirect(url_for("web.borrow_page"))
        except LibraryError as e:
            flash(str(e), "danger")
            return _render_borrow_page(request.form)

    return _render_borrow_page({"due_date": BorrowService.default_due_date().isoformat()})


@web_bp.post("/borrow/<int:borrow_id>/return")
@admin_required
def borrow_return(borrow_id: int):
    try:
        BorrowService.return_borrow(borrow_id)
        flash("Book marked as returned.", "success")
    except LibraryError as e:
        flash(str(e), "danger")
    return redirect(url_for("web.borrow_page"))

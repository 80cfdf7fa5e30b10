from datetime import timedelta

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from library_admin.errors import ConflictError, NotFoundError, ValidationError
from library_admin.models.borrow import Borrow, BORROWED, RETURNED
from library_admin.repositories.book_repo import BookRepo
from library_admin.repositories.borrow_repo import BorrowRepo
from library_admin.repositories.student_repo import StudentRepo
from library_admin.utils.clock import today, utcnow
from library_admin.utils.forms import parse_date, parse_int


class BorrowService:
    @staticmethod
    def default_due_date():
        return today() + timedelta(days=current_app.config.get("DEFAULT_LOAN_DAYS", 14))

    @staticmethod
    def list_borrows():
        return BorrowRepo.list_all()

    @staticmethod
    def list_active():
        return BorrowRepo.list_active()

    @staticmethod
    def list_recently_returned(limit: int = 5):
        return BorrowRepo.list_recently_returned(limit)

    @staticmethod
    def create_borrow(data: dict):
        """Lend one copy of a book to a student.

        The borrow row and the stock decrement are written in one transaction.
        The decrement only matches while ``available_quantity > 0``, so a stale
        count on the caller's side can never push the stock below zero.
        """
        student_id = parse_int(data, "student_id", "Student")
        book_id = parse_int(data, "book_id", "Book")
        due_date = parse_date(data, "due_date", "Due date")

        if due_date < today():
            raise ValidationError("Due date cannot be in the past")

        if not StudentRepo.get(student_id):
            raise NotFoundError("Student not found")
        if not BookRepo.get(book_id):
            raise NotFoundError("Book not found")

        try:
            # 1) stok düş (koşullu, atomik)
            if not BookRepo.take_copy(book_id):
                BorrowRepo.rollback()
                current_app.logger.warning(f"[borrow] book_id={book_id} has no available copy")
                raise ConflictError("This book is not available for borrowing.")

            # 2) borrow kaydı
            borrow = Borrow(
                student_id=student_id,
                book_id=book_id,
                borrow_date=utcnow(),
                due_date=due_date,
                status=BORROWED,
            )
            BorrowRepo.add(borrow)

            # tek commit noktası
            BorrowRepo.commit()
        except SQLAlchemyError:
            BorrowRepo.rollback()
            current_app.logger.exception(f"[borrow] create failed student_id={student_id} book_id={book_id}")
            raise

        current_app.logger.info(
            f"[borrow] created id={borrow.id} student_id={student_id} book_id={book_id} due={due_date}"
        )
        return borrow

    @staticmethod
    def return_borrow(borrow_id: int):
        borrow = BorrowRepo.get(borrow_id)
        if not borrow:
            raise NotFoundError("Borrow record not found")

        book_id = borrow.book_id
        if borrow.status == RETURNED or borrow.return_date is not None:
            current_app.logger.warning(f"[borrow] id={borrow_id} already returned")
            raise ConflictError("This book has already been returned.")

        try:
            # 1) durum değişimi koşullu: sadece hâlâ "borrowed" ise
            if not BorrowRepo.mark_returned(borrow_id, utcnow()):
                BorrowRepo.rollback()
                current_app.logger.warning(f"[borrow] id={borrow_id} was returned concurrently")
                raise ConflictError("This book has already been returned.")

            # 2) stok iade, quantity üstüne çıkmaz
            if not BookRepo.put_back_copy(book_id):
                current_app.logger.warning(
                    f"[borrow] book_id={book_id} already at full stock, count left unchanged"
                )

            BorrowRepo.commit()
        except SQLAlchemyError:
            BorrowRepo.rollback()
            current_app.logger.exception(f"[borrow] return failed id={borrow_id}")
            raise

        current_app.logger.info(f"[borrow] returned id={borrow_id} book_id={book_id}")
        return BorrowRepo.get(borrow_id)

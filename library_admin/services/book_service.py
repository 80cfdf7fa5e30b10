from flask import current_app

from library_admin.errors import ConflictError, NotFoundError, ValidationError
from library_admin.models.book import Book
from library_admin.repositories.book_repo import BookRepo
from library_admin.repositories.borrow_repo import BorrowRepo
from library_admin.utils.forms import optional_str, parse_int, required_str


class BookService:
    FIELDS = ("title", "author", "isbn", "quantity", "available_quantity")

    @staticmethod
    def _clean(data: dict) -> dict:
        quantity = parse_int(data, "quantity", "Quantity", default=1, min_value=1)
        available = parse_int(data, "available_quantity", "Available quantity",
                              default=quantity, min_value=0)
        if available > quantity:
            raise ValidationError("Available quantity cannot exceed quantity")
        return {
            "title": required_str(data, "title", "Title"),
            "author": required_str(data, "author", "Author"),
            "isbn": optional_str(data, "isbn"),
            "quantity": quantity,
            "available_quantity": available,
        }

    @staticmethod
    def list_books():
        return BookRepo.list_all()

    @staticmethod
    def list_available_books():
        return BookRepo.list_available()

    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError("Book not found")
        return book

    @staticmethod
    def create_book(data: dict):
        book = Book(**BookService._clean(data))
        BookRepo.create(book)
        current_app.logger.info(f"[books] created id={book.id} quantity={book.quantity}")
        return book

    @staticmethod
    def update_book(book_id: int, data: dict):
        book = BookService.get_book(book_id)
        merged = {k: getattr(book, k) for k in BookService.FIELDS}
        merged.update(data)
        for k, v in BookService._clean(merged).items():
            setattr(book, k, v)
        BookRepo.update()
        current_app.logger.info(
            f"[books] updated id={book.id} available={book.available_quantity}/{book.quantity}"
        )
        return book

    @staticmethod
    def delete_book(book_id: int):
        book = BookService.get_book(book_id)
        if BorrowRepo.count_for_book(book_id) > 0:
            current_app.logger.warning(f"[books] delete refused, id={book_id} has borrow records")
            raise ConflictError("This book has borrow records and cannot be deleted.")
        BookRepo.delete(book)
        current_app.logger.info(f"[books] deleted id={book_id}")

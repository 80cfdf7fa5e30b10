from sqlalchemy import update

from library_admin.models.book import Book
from library_admin.extensions import db


class BookRepo:
    @staticmethod
    def list_all():
        return Book.query.order_by(Book.created_at.desc(), Book.id.desc()).all()

    @staticmethod
    def list_available():
        return Book.query.filter(Book.available_quantity > 0).order_by(Book.title).all()

    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.commit()

    @staticmethod
    def take_copy(book_id: int) -> bool:
        """Atomic ``available_quantity - 1`` guarded by ``available_quantity > 0``.

        Does not commit. Returns False when no copy was left to take.
        """
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_quantity > 0)
            .values(available_quantity=Book.available_quantity - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def put_back_copy(book_id: int) -> bool:
        """Atomic ``available_quantity + 1``, never above ``quantity``. Does not commit."""
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_quantity < Book.quantity)
            .values(available_quantity=Book.available_quantity + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

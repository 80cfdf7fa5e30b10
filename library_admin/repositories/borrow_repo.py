from sqlalchemy import update
from sqlalchemy.orm import joinedload

from library_admin.models.borrow import Borrow, BORROWED, RETURNED
from library_admin.extensions import db


class BorrowRepo:
    @staticmethod
    def get(borrow_id: int):
        return db.session.get(Borrow, borrow_id)

    @staticmethod
    def _with_details():
        return Borrow.query.options(joinedload(Borrow.student), joinedload(Borrow.book))

    @staticmethod
    def list_all():
        return BorrowRepo._with_details().order_by(Borrow.created_at.desc(), Borrow.id.desc()).all()

    @staticmethod
    def list_active():
        return (
            BorrowRepo._with_details()
            .filter(Borrow.status == BORROWED)
            .order_by(Borrow.created_at.desc(), Borrow.id.desc())
            .all()
        )

    @staticmethod
    def list_recently_returned(limit: int = 5):
        return (
            BorrowRepo._with_details()
            .filter(Borrow.status == RETURNED)
            .order_by(Borrow.return_date.desc(), Borrow.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def count_for_student(student_id: int) -> int:
        return Borrow.query.filter(Borrow.student_id == student_id).count()

    @staticmethod
    def count_for_book(book_id: int) -> int:
        return Borrow.query.filter(Borrow.book_id == book_id).count()

    @staticmethod
    def mark_returned(borrow_id: int, returned_at) -> bool:
        """Atomic ``borrowed -> returned`` switch. Does not commit.

        Returns False when the row was not in ``borrowed`` state anymore.
        """
        result = db.session.execute(
            update(Borrow)
            .where(Borrow.id == borrow_id, Borrow.status == BORROWED)
            .values(status=RETURNED, return_date=returned_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def add(borrow: Borrow):
        # commit yok: borrow + stok tek transaction'da yazılır
        db.session.add(borrow)
        return borrow

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()

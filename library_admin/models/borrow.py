from library_admin.extensions import db
from library_admin.utils.clock import utcnow, today

BORROWED = "borrowed"
RETURNED = "returned"


class Borrow(db.Model):
    __tablename__ = "borrows"

    id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    borrow_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    due_date = db.Column(db.Date, nullable=False)
    return_date = db.Column(db.DateTime, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=BORROWED)  # borrowed/returned

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    student = db.relationship("Student", backref="borrows")
    book = db.relationship("Book", backref="borrows")

    def overdue_days(self, on=None) -> int:
        if self.status != BORROWED or not self.due_date:
            return 0
        on = on or today()
        # due_date gece yarısı geçildiği anda gecikmiş sayılır, teslim günü dahil
        if self.due_date > on:
            return 0
        return (on - self.due_date).days + 1

    def is_overdue(self, on=None) -> bool:
        return self.overdue_days(on) > 0

from datetime import date, timedelta

import pytest

from library_admin.errors import ConflictError, NotFoundError, ValidationError
from library_admin.models.borrow import Borrow, BORROWED, RETURNED
from library_admin.repositories.book_repo import BookRepo
from library_admin.repositories.borrow_repo import BorrowRepo
from library_admin.services.borrow_service import BorrowService
from library_admin.utils.clock import today


def _due(days=7):
    return (today() + timedelta(days=days)).isoformat()


def test_borrow_then_return_restores_stock(ctx, make_student, make_book):
    student_id = make_student()
    book_id = make_book(quantity=3, available_quantity=3)

    borrow = BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due()})
    assert borrow.status == BORROWED
    assert borrow.borrow_date is not None
    assert borrow.return_date is None
    assert BookRepo.get(book_id).available_quantity == 2

    returned = BorrowService.return_borrow(borrow.id)
    assert returned.status == RETURNED
    assert returned.return_date is not None
    assert BookRepo.get(book_id).available_quantity == 3


def test_stock_accounting_over_many_operations(ctx, make_student, make_book):
    student_id = make_student()
    book_id = make_book(quantity=5, available_quantity=5)

    borrows = [
        BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due()})
        for _ in range(4)
    ]
    for b in borrows[:3]:
        BorrowService.return_borrow(b.id)

    book = BookRepo.get(book_id)
    assert book.available_quantity == 5 - 4 + 3
    assert 0 <= book.available_quantity <= book.quantity


def test_borrow_refused_when_no_copy_left(ctx, make_student, make_book):
    student_id = make_student()
    book_id = make_book(quantity=1, available_quantity=1)

    BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due()})
    with pytest.raises(ConflictError):
        BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due()})

    assert BookRepo.get(book_id).available_quantity == 0
    assert len(BorrowService.list_borrows()) == 1


def test_due_date_in_the_past_is_rejected(ctx, make_student, make_book):
    student_id = make_student()
    book_id = make_book()

    with pytest.raises(ValidationError):
        BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due(-1)})
    assert BookRepo.get(book_id).available_quantity == 3


def test_due_date_today_is_accepted(ctx, make_student, make_book):
    borrow = BorrowService.create_borrow({
        "student_id": make_student(), "book_id": make_book(), "due_date": today().isoformat()
    })
    assert borrow.due_date == today()


@pytest.mark.parametrize("payload", [
    {"book_id": 1, "due_date": "2999-01-01"},
    {"student_id": 1, "due_date": "2999-01-01"},
    {"student_id": 1, "book_id": 1},
    {"student_id": 1, "book_id": 1, "due_date": "not-a-date"},
    {"student_id": "x", "book_id": 1, "due_date": "2999-01-01"},
    {"student_id": "1" + "0" * 25, "book_id": 1, "due_date": "2999-01-01"},
])
def test_incomplete_borrow_form_is_rejected(ctx, payload):
    with pytest.raises(ValidationError):
        BorrowService.create_borrow(payload)


def test_unknown_student_or_book(ctx, make_student, make_book):
    with pytest.raises(NotFoundError):
        BorrowService.create_borrow({"student_id": 999, "book_id": make_book(), "due_date": _due()})
    with pytest.raises(NotFoundError):
        BorrowService.create_borrow({"student_id": make_student(), "book_id": 999, "due_date": _due()})


def test_double_return_is_refused(ctx, make_student, make_book):
    book_id = make_book(quantity=2, available_quantity=2)
    borrow = BorrowService.create_borrow({"student_id": make_student(), "book_id": book_id, "due_date": _due()})

    BorrowService.return_borrow(borrow.id)
    with pytest.raises(ConflictError):
        BorrowService.return_borrow(borrow.id)

    assert BookRepo.get(book_id).available_quantity == 2


def test_return_unknown_borrow(ctx):
    with pytest.raises(NotFoundError):
        BorrowService.return_borrow(12345)


def test_return_never_exceeds_quantity(ctx, make_student, make_book):
    book_id = make_book(quantity=2, available_quantity=2)
    borrow = BorrowService.create_borrow({"student_id": make_student(), "book_id": book_id, "due_date": _due()})

    # stok elle düzeltilmiş olabilir
    book = BookRepo.get(book_id)
    book.available_quantity = 2
    BookRepo.update()

    BorrowService.return_borrow(borrow.id)
    assert BookRepo.get(book_id).available_quantity == 2


def test_active_and_recently_returned_lists(ctx, make_student, make_book):
    student_id = make_student()
    book_id = make_book(quantity=10, available_quantity=10)
    borrows = [
        BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due()})
        for _ in range(8)
    ]
    for b in borrows[:6]:
        BorrowService.return_borrow(b.id)

    assert len(BorrowService.list_active()) == 2
    assert len(BorrowService.list_recently_returned()) == 5
    assert len(BorrowService.list_borrows()) == 8


def test_default_due_date_uses_loan_days(ctx):
    assert BorrowService.default_due_date() == today() + timedelta(days=14)


def test_overdue_is_derived_from_due_date():
    b = Borrow(due_date=date(2024, 1, 10), status=BORROWED)
    assert not b.is_overdue(on=date(2024, 1, 9))
    assert b.is_overdue(on=date(2024, 1, 10))
    assert b.overdue_days(on=date(2024, 1, 10)) == 1
    assert b.overdue_days(on=date(2024, 1, 15)) == 6

    b.status = RETURNED
    assert not b.is_overdue(on=date(2024, 1, 15))


def test_stale_second_return_does_not_inflate_stock(app, make_student, make_book):
    student_id = make_student()
    book_id = make_book(quantity=3, available_quantity=3)

    with app.test_request_context():
        first = BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due()}).id
        BorrowService.create_borrow({"student_id": student_id, "book_id": book_id, "due_date": _due()})

    with app.test_request_context():
        # bu oturum kaydı hâlâ "borrowed" olarak görüyor
        stale = BorrowRepo.get(first)
        assert stale.status == BORROWED

        # başka bir istek aynı kaydı iade ediyor (ayrı app context = ayrı session)
        with app.app_context():
            BorrowService.return_borrow(first)

        with pytest.raises(ConflictError):
            BorrowService.return_borrow(first)

    with app.app_context():
        assert BookRepo.get(book_id).available_quantity == 3 - 1
        assert len(BorrowService.list_active()) == 1

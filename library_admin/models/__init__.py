from library_admin.models.user import User
from library_admin.models.admin_user import AdminUser
from library_admin.models.student import Student
from library_admin.models.book import Book
from library_admin.models.borrow import Borrow, BORROWED, RETURNED

__all__ = ["User", "AdminUser", "Student", "Book", "Borrow", "BORROWED", "RETURNED"]

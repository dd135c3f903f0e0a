from datetime import datetime

from flask import current_app

from booklend.errors import ConsistencyError, NotFound, ValidationError
from booklend.models.borrow import Borrow
from booklend.repositories.book_repo import BookRepo
from booklend.repositories.borrow_repo import BorrowRepo
from booklend.services.catalog_service import CatalogService
from booklend.utils.timeutil import parse_datetime, utcnow
from booklend.utils.validators import FieldValidator

NOT_AVAILABLE = "Book is not available for borrowing"
INSUFFICIENT = "Insufficient copies available for borrowing"


class LendingService:
    """
    Borrow lifecycle. The borrow row and the book's copy count are written in
    one transaction, and the decrement is a conditional update checked by the
    store, so concurrent borrows cannot push copies below zero.
    """

    def __init__(self, catalog: CatalogService, borrow_repo=BorrowRepo, book_repo=BookRepo,
                 strict_restore: bool = False, clock=utcnow):
        self.catalog = catalog
        self.borrows = borrow_repo
        self.books = book_repo
        self.strict_restore = strict_restore
        self.clock = clock

    def borrow(self, book_id, quantity, due_date) -> Borrow:
        errors = {}

        q = FieldValidator.integer(quantity)
        if q is None or q < 1:
            errors["quantity"] = "`quantity` must be an integer of at least 1."

        due = self._parse_due_date(due_date, errors)

        bid = FieldValidator.integer(book_id)
        if bid is None:
            errors["book"] = "`book` must be a book id."

        if errors:
            raise ValidationError("Validation failed", errors)

        # NotFound propagates
        book = self.catalog.get(bid)

        if not book.available:
            raise ValidationError(NOT_AVAILABLE, {"book": NOT_AVAILABLE})
        if book.copies < q:
            raise ValidationError(INSUFFICIENT, {"quantity": INSUFFICIENT})

        try:
            # book may have changed since the read above
            if not self.books.adjust_copies(book.id, -q):
                self.books.rollback()
                raise ValidationError(INSUFFICIENT, {"quantity": INSUFFICIENT})

            borrow = self.borrows.add(Borrow(book_id=book.id, quantity=q, due_date=due))
            self.borrows.commit()
        except ValidationError:
            raise
        except Exception:
            self.borrows.rollback()
            raise

        current_app.logger.info(
            f'[lending] Book "{book.title}" borrowed: {q} copies. Remaining: {book.copies}'
        )
        return borrow

    def cancel(self, borrow_id: int) -> Borrow:
        borrow = self.get(borrow_id)
        book_id, quantity = borrow.book_id, borrow.quantity

        try:
            self.borrows.delete(borrow)
            restored = self.books.adjust_copies(book_id, quantity)

            if not restored and self.strict_restore:
                self.borrows.rollback()
                raise ConsistencyError(
                    f"Book {book_id} no longer exists; {quantity} copies could not be restored"
                )
            self.borrows.commit()
        except ConsistencyError:
            raise
        except Exception:
            self.borrows.rollback()
            raise

        if restored:
            # the book can be deleted between the commit and this read
            book = self.books.get(book_id)
            total = book.copies if book is not None else "unknown"
            current_app.logger.info(
                f"[lending] Book {book_id} borrowing cancelled: "
                f"{quantity} copies restored. Total: {total}"
            )
        else:
            current_app.logger.warning(
                f"[lending] Borrow {borrow_id} cancelled but book {book_id} is gone; "
                f"{quantity} copies not restored"
            )
        return borrow

    def get(self, borrow_id: int) -> Borrow:
        borrow = self.borrows.get(borrow_id)
        if not borrow:
            raise NotFound("Borrow record not found")
        return borrow

    def list_borrows(self):
        return self.borrows.list_all()

    def summary(self) -> list[dict]:
        return [
            {
                "book": {"title": row.title, "isbn": row.isbn},
                "totalQuantity": int(row.total_quantity),
            }
            for row in self.borrows.summary()
        ]

    def _parse_due_date(self, value, errors: dict) -> datetime | None:
        if value is None:
            errors["dueDate"] = "Path `dueDate` is required."
            return None
        try:
            due = parse_datetime(value)
        except (TypeError, ValueError):
            errors["dueDate"] = "`dueDate` must be an ISO-8601 date."
            return None
        if due <= self.clock():
            errors["dueDate"] = "Due date must be in the future"
            return None
        return due

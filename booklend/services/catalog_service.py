from flask import current_app
from sqlalchemy.exc import IntegrityError

from booklend.errors import NotFound, ValidationError
from booklend.models.book import Book
from booklend.repositories.book_repo import BookRepo
from booklend.repositories.borrow_repo import BorrowRepo
from booklend.utils.validators import BookValidator, FieldValidator

# wire name -> attribute
SORT_FIELDS = {
    "id": "id",
    "title": "title",
    "author": "author",
    "genre": "genre",
    "isbn": "isbn",
    "description": "description",
    "copies": "copies",
    "available": "available",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}

DELETE_POLICIES = ("orphan", "block")


class CatalogService:
    def __init__(self, book_repo=BookRepo, borrow_repo=BorrowRepo,
                 delete_policy: str = "orphan", default_limit: int = 10):
        if delete_policy not in DELETE_POLICIES:
            raise ValueError(f"unknown book delete policy: {delete_policy!r}")
        self.books = book_repo
        self.borrows = borrow_repo
        self.delete_policy = delete_policy
        self.default_limit = default_limit

    # -----------------------------
    # Writes
    # -----------------------------
    def create(self, data: dict) -> Book:
        fields, errors = BookValidator.clean(data or {})
        if "isbn" in fields and self.books.get_by_isbn(fields["isbn"]):
            errors["isbn"] = "ISBN must be unique"
        if errors:
            raise ValidationError("Validation failed", errors)

        book = Book(**fields)
        book.update_availability()
        self._save(lambda: self.books.add(book))
        self._log_saved(book)
        return book

    def update(self, book_id: int, data: dict) -> Book:
        book = self.get(book_id)

        fields, errors = BookValidator.clean(data or {}, partial=True)
        if "isbn" in fields and fields["isbn"] != book.isbn:
            if self.books.get_by_isbn(fields["isbn"], exclude_id=book.id):
                errors["isbn"] = "ISBN must be unique"
        if errors:
            raise ValidationError("Validation failed", errors)

        def _apply():
            self.books.update_by_id(book.id, fields)
            book.update_availability()

        self._save(_apply)
        self._log_saved(book)
        return book

    def refresh_availability(self, book: Book) -> Book:
        """Recompute `available` from `copies` and persist; safe to repeat."""
        book.update_availability()
        self._save(lambda: None)
        return book

    def delete(self, book_id: int) -> None:
        book = self.get(book_id)

        if self.delete_policy == "block":
            active = self.borrows.count_for_book(book.id)
            if active > 0:
                raise ValidationError(
                    "Book has active borrow records",
                    {"book": f"{active} active borrow record(s) reference this book"},
                )

        self.books.delete(book)
        self.books.commit()
        current_app.logger.info(f'[catalog] Book "{book.title}" deleted (id={book_id})')

    # -----------------------------
    # Reads
    # -----------------------------
    def get(self, book_id: int) -> Book:
        book = self.books.get(book_id)
        if not book:
            raise NotFound("Book not found")
        return book

    def list_by_genre(self, genre: str):
        return self.books.find(genre=genre, available=True)

    def list_available(self):
        return self.books.find(available=True)

    def list(self, filter: str | None = None, sort_by: str = "createdAt",
             sort: str = "asc", limit=None):
        if limit is None:
            limit = self.default_limit
        n = FieldValidator.integer(limit)
        if n is None or n < 0:
            raise ValidationError("Validation failed", {"limit": "`limit` must be a non-negative integer."})

        books = self.list_by_genre(filter) if filter else self.list_available()

        attr = SORT_FIELDS.get(sort_by)
        if attr:
            # None sorts before any value in either direction of comparison
            books = sorted(
                books,
                key=lambda b: (getattr(b, attr) is not None, getattr(b, attr)),
                reverse=(sort == "desc"),
            )
        return books[:n]

    # -----------------------------
    # Helpers
    # -----------------------------
    def _save(self, apply):
        try:
            apply()
            self.books.commit()
        except IntegrityError as e:
            self.books.rollback()
            # lost a race on the unique index, or a CHECK constraint fired
            if "isbn" in str(e.orig).lower():
                raise ValidationError("Validation failed", {"isbn": "ISBN must be unique"}) from e
            raise ValidationError("Validation failed", {"book": "Constraint violated"}) from e
        except Exception:
            self.books.rollback()
            raise

    @staticmethod
    def _log_saved(book: Book):
        current_app.logger.info(f'[catalog] Book "{book.title}" saved with {book.copies} copies available')

from sqlalchemy import inspect, update

from booklend.extensions import db
from booklend.models.book import Book
from booklend.utils.timeutil import utcnow


class BookRepo:
    @staticmethod
    def find(**criteria):
        return Book.query.filter_by(**criteria).order_by(Book.id.asc()).all()

    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def get_by_isbn(isbn: str, exclude_id: int | None = None):
        q = Book.query.filter(Book.isbn == isbn)
        if exclude_id is not None:
            q = q.filter(Book.id != exclude_id)
        return q.first()

    @staticmethod
    def add(book: Book):
        db.session.add(book)
        db.session.flush()
        return book

    @staticmethod
    def update_by_id(book_id: int, fields: dict):
        book = BookRepo.get(book_id)
        if not book:
            return None
        for k, v in fields.items():
            setattr(book, k, v)
        db.session.flush()
        return book

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.flush()

    @staticmethod
    def adjust_copies(book_id: int, delta: int) -> bool:
        """
        Conditional UPDATE of copies by delta; availability is recomputed in the
        same statement. A decrement only applies while the book is available and
        still holds enough copies, checked by the store, not by the caller.
        Returns False when no row matched.
        """
        stmt = update(Book).where(Book.id == book_id)
        if delta < 0:
            stmt = stmt.where(Book.available.is_(True), Book.copies >= -delta)

        stmt = stmt.values(
            copies=Book.copies + delta,
            available=(Book.copies + delta) > 0,
            updated_at=utcnow(),
        ).execution_options(synchronize_session=False)

        res = db.session.execute(stmt)
        matched = res.rowcount == 1

        # the identity map still holds the pre-update row
        book = db.session.identity_map.get(inspect(Book).identity_key_from_primary_key((book_id,)))
        if book is not None:
            db.session.expire(book)
        return matched

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()

from sqlalchemy import func

from booklend.extensions import db
from booklend.models.book import Book
from booklend.models.borrow import Borrow


class BorrowRepo:
    @staticmethod
    def get(borrow_id: int):
        return db.session.get(Borrow, borrow_id)

    @staticmethod
    def list_all():
        return Borrow.query.order_by(Borrow.id.desc()).all()

    @staticmethod
    def count_for_book(book_id: int) -> int:
        return Borrow.query.filter(Borrow.book_id == book_id).count()

    @staticmethod
    def add(borrow: Borrow):
        db.session.add(borrow)
        db.session.flush()
        return borrow

    @staticmethod
    def delete(borrow: Borrow):
        db.session.delete(borrow)
        db.session.flush()

    @staticmethod
    def summary():
        """
        Borrowed quantity per book, joined to the book's title/isbn.
        Borrows pointing at a deleted book are dropped by the inner join.
        """
        return (
            db.session.query(
                Borrow.book_id.label("book_id"),
                Book.title.label("title"),
                Book.isbn.label("isbn"),
                func.sum(Borrow.quantity).label("total_quantity"),
            )
            .join(Book, Book.id == Borrow.book_id)
            .group_by(Borrow.book_id, Book.title, Book.isbn)
            .order_by(Borrow.book_id.asc())
            .all()
        )

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()

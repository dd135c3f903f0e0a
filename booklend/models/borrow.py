from booklend.extensions import db
from booklend.utils.timeutil import isoformat, utcnow


class Borrow(db.Model):
    __tablename__ = "borrows"
    __table_args__ = (
        db.CheckConstraint("quantity >= 1", name="ck_borrows_quantity_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)

    # no FK: deleting a book may leave its borrows behind (BOOK_DELETE_POLICY=orphan)
    book_id = db.Column(db.Integer, nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "book": self.book_id,
            "quantity": self.quantity,
            "dueDate": isoformat(self.due_date),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

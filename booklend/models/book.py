import enum

from booklend.extensions import db
from booklend.utils.timeutil import isoformat, utcnow


class Genre(str, enum.Enum):
    FICTION = "FICTION"
    NON_FICTION = "NON_FICTION"
    SCIENCE = "SCIENCE"
    HISTORY = "HISTORY"
    BIOGRAPHY = "BIOGRAPHY"
    FANTASY = "FANTASY"

    @classmethod
    def values(cls):
        return [g.value for g in cls]


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("copies >= 0", name="ck_books_copies_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False, index=True)
    genre = db.Column(db.String(20), nullable=False, index=True)
    isbn = db.Column(db.String(32), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    copies = db.Column(db.Integer, nullable=False, default=0)
    available = db.Column(db.Boolean, nullable=False, default=True, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def update_availability(self) -> bool:
        self.available = self.copies > 0
        return self.available

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "isbn": self.isbn,
            "description": self.description,
            "copies": self.copies,
            "available": self.available,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Book {self.id} {self.isbn!r} copies={self.copies}>"

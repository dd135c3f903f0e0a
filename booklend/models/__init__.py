from booklend.models.book import Book, Genre
from booklend.models.borrow import Borrow

__all__ = ["Book", "Genre", "Borrow"]

from flask import Blueprint, current_app, request
from sqlalchemy.exc import SQLAlchemyError

from booklend.errors import NotFound, ValidationError
from booklend.utils.responses import json_body, json_error, json_ok, store_error, validation_error

book_bp = Blueprint("books", __name__)

NOT_FOUND_DETAIL = "Book with this ID does not exist"


def _catalog():
    return current_app.extensions["catalog"]


@book_bp.post("/")
def create_book():
    try:
        data = json_body()
        book = _catalog().create(data)
        return json_ok("Book created successfully", book.to_dict(), 201)
    except ValidationError as e:
        return validation_error(e)
    except SQLAlchemyError as e:
        return store_error("Error creating book", e)


@book_bp.get("/")
def list_books():
    args = request.args
    try:
        books = _catalog().list(
            filter=args.get("filter") or None,
            sort_by=args.get("sortBy", "createdAt"),
            sort=args.get("sort", "asc"),
            limit=args.get("limit"),
        )
        current_app.logger.info(f"[catalog] Retrieved {len(books)} books")
        return json_ok("Books retrieved successfully", [b.to_dict() for b in books])
    except ValidationError as e:
        return validation_error(e)
    except SQLAlchemyError as e:
        return store_error("Error retrieving books", e)


@book_bp.get("/genre/<genre>")
def list_books_by_genre(genre: str):
    try:
        books = _catalog().list_by_genre(genre)
        return json_ok(f"Books in {genre} genre retrieved successfully", [b.to_dict() for b in books])
    except SQLAlchemyError as e:
        return store_error("Error retrieving books by genre", e)


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    try:
        book = _catalog().get(book_id)
        return json_ok("Book retrieved successfully", book.to_dict())
    except NotFound as e:
        return json_error(e.message, NOT_FOUND_DETAIL, 404)
    except SQLAlchemyError as e:
        return store_error("Error retrieving book", e)


@book_bp.put("/<int:book_id>")
def update_book(book_id: int):
    try:
        data = json_body()
        book = _catalog().update(book_id, data)
        return json_ok("Book updated successfully", book.to_dict())
    except NotFound as e:
        return json_error(e.message, NOT_FOUND_DETAIL, 404)
    except ValidationError as e:
        return validation_error(e)
    except SQLAlchemyError as e:
        return store_error("Error updating book", e)


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    try:
        _catalog().delete(book_id)
        return json_ok("Book deleted successfully", None)
    except NotFound as e:
        return json_error(e.message, NOT_FOUND_DETAIL, 404)
    except ValidationError as e:
        return validation_error(e)
    except SQLAlchemyError as e:
        return store_error("Error deleting book", e)

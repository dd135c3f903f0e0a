from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError

from booklend.errors import ConsistencyError, NotFound, ValidationError
from booklend.utils.responses import json_body, json_error, json_ok, store_error, validation_error

borrow_bp = Blueprint("borrow", __name__)


def _lending():
    return current_app.extensions["lending"]


@borrow_bp.post("/")
def borrow_book():
    try:
        data = json_body()
        borrow = _lending().borrow(data.get("book"), data.get("quantity"), data.get("dueDate"))
        return json_ok("Book borrowed successfully", borrow.to_dict(), 201)
    except ValidationError as e:
        return validation_error(e)
    except NotFound as e:
        # a missing book is a bad borrow request, not a missing resource
        return json_error(e.message, e.message, 400)
    except SQLAlchemyError as e:
        return store_error("Borrow failed", e)


@borrow_bp.get("/")
def borrowed_summary():
    try:
        summary = _lending().summary()
        return json_ok("Borrowed books summary retrieved successfully", summary)
    except SQLAlchemyError as e:
        return store_error("Summary failed", e)


@borrow_bp.get("/records")
def list_borrows():
    try:
        borrows = _lending().list_borrows()
        return json_ok("Borrow records retrieved successfully", [b.to_dict() for b in borrows])
    except SQLAlchemyError as e:
        return store_error("Error retrieving borrow records", e)


@borrow_bp.get("/<int:borrow_id>")
def get_borrow(borrow_id: int):
    try:
        borrow = _lending().get(borrow_id)
        return json_ok("Borrow record retrieved successfully", borrow.to_dict())
    except NotFound as e:
        return json_error(e.message, "Borrow with this ID does not exist", 404)
    except SQLAlchemyError as e:
        return store_error("Error retrieving borrow record", e)


@borrow_bp.delete("/<int:borrow_id>")
def cancel_borrow(borrow_id: int):
    try:
        _lending().cancel(borrow_id)
        return json_ok("Borrow cancelled successfully", None)
    except NotFound as e:
        return json_error(e.message, "Borrow with this ID does not exist", 404)
    except ConsistencyError as e:
        current_app.logger.error(f"[lending] {e.message}")
        return json_error("Error cancelling borrow", e.message, 409)
    except SQLAlchemyError as e:
        return store_error("Error cancelling borrow", e)

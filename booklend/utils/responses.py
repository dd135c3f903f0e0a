from flask import current_app, jsonify, request

from booklend.extensions import db
from booklend.errors import ValidationError


def json_ok(message: str, data=None, code: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), code


def json_error(message: str, error=None, code: int = 400):
    return jsonify({"success": False, "message": message, "error": error}), code


def validation_error(e: ValidationError, code: int = 400):
    return json_error(e.message, e.to_dict(), code)


def store_error(message: str, e: Exception):
    """Store failures: rollback, log the details, report generically."""
    db.session.rollback()
    current_app.logger.exception(f"[store] {message}: {e}")
    return json_error(message, "Internal store error", 500)


def json_body() -> dict:
    """Request body as a dict; a missing body is empty, any other JSON type is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Validation failed", {"body": "expected a JSON object"})
    return data

class LibraryError(Exception):
    """Base class for errors raised by the catalog and lending services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LibraryError, ValueError):
    """
    Bad input or a broken invariant.
    errors: field name -> message, so the caller can correct the request.
    """

    def __init__(self, message: str = "Validation failed", errors: dict | None = None):
        super().__init__(message)
        self.errors = dict(errors or {})

    def to_dict(self) -> dict:
        return {"name": "ValidationError", "errors": self.errors}


class NotFound(LibraryError, LookupError):
    pass


class ConsistencyError(LibraryError):
    """A side effect could not be applied after the primary write."""

import re

from booklend.models.book import Genre

INT_RE = re.compile(r"-?\d+", re.ASCII)


class FieldValidator:
    """Small coercion helpers shared by the book and borrow checks."""

    @staticmethod
    def non_empty_text(value) -> str | None:
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value or None

    @staticmethod
    def integer(value) -> int | None:
        # bool is an int subclass; true/false is never a count
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and INT_RE.fullmatch(value.strip()):
            return int(value.strip())
        return None


class BookValidator:
    REQUIRED = ("title", "author", "genre", "isbn", "copies")
    WRITABLE = ("title", "author", "genre", "isbn", "description", "copies")

    @staticmethod
    def clean(data: dict, partial: bool = False) -> tuple[dict, dict]:
        """
        Returns (cleaned fields, errors). Unknown keys, id and available are
        dropped; with partial=True missing required fields are not errors.
        """
        cleaned, errors = {}, {}

        if not isinstance(data, dict):
            return cleaned, {"body": "expected a JSON object"}

        if not partial:
            for k in BookValidator.REQUIRED:
                if data.get(k) is None:
                    errors[k] = f"Path `{k}` is required."

        for k in ("title", "author", "isbn"):
            if k in data and k not in errors:
                v = FieldValidator.non_empty_text(data[k])
                if v is None:
                    errors[k] = f"`{k}` must be a non-empty string."
                else:
                    cleaned[k] = v

        if "genre" in data and "genre" not in errors:
            genre = data["genre"]
            if genre not in Genre.values():
                errors["genre"] = f"`{genre}` is not a valid genre; expected one of {', '.join(Genre.values())}."
            else:
                cleaned["genre"] = genre

        if "description" in data:
            desc = data["description"]
            if desc is None:
                cleaned["description"] = None
            elif not isinstance(desc, str):
                errors["description"] = "`description` must be a string."
            else:
                cleaned["description"] = desc

        if "copies" in data and "copies" not in errors:
            copies = FieldValidator.integer(data["copies"])
            if copies is None:
                errors["copies"] = "`copies` must be an integer."
            elif copies < 0:
                errors["copies"] = "`copies` must not be negative."
            else:
                cleaned["copies"] = copies

        return cleaned, errors

from booklend.extensions import db

# registers the tables on db.metadata
from booklend import models  # noqa: F401


def ensure_db_objects(app):
    """Create missing tables (and their CHECK/unique constraints) when enabled."""
    if not app.config.get("AUTO_CREATE_TABLES"):
        app.logger.info("[db_objects] AUTO_CREATE_TABLES off; use `flask db upgrade`.")
        return

    with app.app_context():
        try:
            db.create_all()
            app.logger.info("[db_objects] Tables ensured (books, borrows).")
        except Exception as e:
            app.logger.error(f"[db_objects] Error: {e}")
            raise

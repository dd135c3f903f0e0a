from flask import Flask, jsonify

from booklend.config import Config
from booklend.extensions import db, migrate
from booklend.db_objects import ensure_db_objects
from booklend.repositories.book_repo import BookRepo
from booklend.repositories.borrow_repo import BorrowRepo
from booklend.services.catalog_service import CatalogService
from booklend.services.lending_service import LendingService


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # /api/books and /api/books/ are the same route
    app.url_map.strict_slashes = False

    # 1) db first, tables need the engine
    db.init_app(app)
    ensure_db_objects(app)

    # 2) migrations (`flask db ...`)
    migrate.init_app(app, db)

    # 3) services; lending gets the catalog handed in explicitly
    catalog = CatalogService(
        book_repo=BookRepo,
        borrow_repo=BorrowRepo,
        delete_policy=app.config["BOOK_DELETE_POLICY"],
        default_limit=app.config["DEFAULT_LIST_LIMIT"],
    )
    app.extensions["catalog"] = catalog
    app.extensions["lending"] = LendingService(
        catalog,
        borrow_repo=BorrowRepo,
        book_repo=BookRepo,
        strict_restore=app.config["LENDING_STRICT_RESTORE"],
    )

    # 4) API blueprints
    from booklend.controllers.book_controller import book_bp
    from booklend.controllers.borrow_controller import borrow_bp
    app.register_blueprint(book_bp, url_prefix="/api/books")
    app.register_blueprint(borrow_bp, url_prefix="/api/borrow")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app

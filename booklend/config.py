import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI",
        "sqlite:///booklend.db"
    )

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # orphan: delete books regardless of borrows / block: refuse while borrows exist
    BOOK_DELETE_POLICY = os.getenv("BOOK_DELETE_POLICY", "orphan")

    # "1": cancelling a borrow whose book is gone fails instead of skipping the restore
    LENDING_STRICT_RESTORE = os.getenv("LENDING_STRICT_RESTORE", "0") == "1"

    DEFAULT_LIST_LIMIT = int(os.getenv("DEFAULT_LIST_LIMIT", "10"))
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "1") == "1"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    BOOK_DELETE_POLICY = "orphan"
    LENDING_STRICT_RESTORE = False
    AUTO_CREATE_TABLES = True
    LOG_LEVEL = "DEBUG"

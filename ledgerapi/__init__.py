"""HTTP service for accounts and money transfers between them, stored through SQLAlchemy."""

__version__ = "0.1.0"
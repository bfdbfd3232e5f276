"""SQLAlchemy models exposed for imports and table creation."""
from .note import Note
from .user import User

__all__ = ["User", "Note"]

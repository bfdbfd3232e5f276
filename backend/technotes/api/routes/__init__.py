"""Route modules for the TechNotes API."""
from . import users

__all__ = ["users"]

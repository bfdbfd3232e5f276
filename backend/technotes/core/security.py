"""Password hashing helpers."""
from __future__ import annotations

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool


_password_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasswordHasher:
    """Hash user passwords using Argon2id."""

    @staticmethod
    async def hash(password: str) -> str:
        """Hash in the threadpool so the event loop keeps serving requests."""

        return await run_in_threadpool(_password_context.hash, password)

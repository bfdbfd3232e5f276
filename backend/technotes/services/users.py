"""User service functions for listing, creating, updating and deleting users."""
from __future__ import annotations

import logging
from typing import Any, Sequence

from technotes.core.errors import (
    ConflictError,
    DependencyError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from technotes.core.security import PasswordHasher
from technotes.db.store import DocumentStore
from technotes.models.note import Note
from technotes.models.user import USERNAME_MAX_LENGTH, User

logger = logging.getLogger(__name__)

PUBLIC_FIELDS = ("id", "username", "roles", "active")


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _check_username_length(username: str) -> None:
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")


def _normalize_roles(roles: Any) -> list[str] | None:
    """Return the role labels deduplicated in order, or None when invalid."""
    if not isinstance(roles, (list, tuple)) or not roles:
        return None
    if not all(_is_text(role) for role in roles):
        return None
    return list(dict.fromkeys(roles))


async def list_users(store: DocumentStore) -> list[dict[str, Any]]:
    users = await store.find_all(User, projection=PUBLIC_FIELDS)
    if not users:
        raise NotFoundError("No Users Found")
    return users


async def get_user_by_username(store: DocumentStore, username: str) -> User | None:
    return await store.find_one(User, username=username)


async def create_user(
    store: DocumentStore,
    username: str | None,
    password: str | None,
    roles: Sequence[str] | None,
) -> str:
    normalized_roles = _normalize_roles(roles)
    if not _is_text(username) or not _is_text(password) or normalized_roles is None:
        raise ValidationError("All Fields are Required")
    _check_username_length(username)

    if await get_user_by_username(store, username):
        raise ConflictError("Duplicate username")

    password_hash = await PasswordHasher.hash(password)
    user = User(username=username, password=password_hash, roles=normalized_roles, active=True)
    try:
        await store.insert(user)
    except DuplicateKeyError as exc:
        # Lost a race with a concurrent create between the lookup and insert.
        raise ConflictError("Duplicate username") from exc

    logger.info("Created user %s", username)
    return f"New User {username} created"


async def update_user(
    store: DocumentStore,
    user_id: str | None,
    username: str | None,
    roles: Sequence[str] | None,
    active: bool | None,
    password: str | None = None,
) -> str:
    normalized_roles = _normalize_roles(roles)
    if (
        not _is_text(user_id)
        or not _is_text(username)
        or normalized_roles is None
        or not isinstance(active, bool)
        or (password is not None and not _is_text(password))
    ):
        raise ValidationError("All Fields are Required")
    _check_username_length(username)

    user = await store.find_by_id(User, user_id)
    if user is None:
        raise NotFoundError("User Not Found")

    duplicate = await get_user_by_username(store, username)
    if duplicate is not None and duplicate.id != user_id:
        raise ConflictError("Duplicate Username")

    user.username = username
    user.roles = normalized_roles
    user.active = active
    if password is not None:
        user.password = await PasswordHasher.hash(password)

    try:
        updated = await store.save(user)
    except DuplicateKeyError as exc:
        raise ConflictError("Duplicate Username") from exc

    logger.info("Updated user %s (%s)", updated.username, updated.id)
    return f"{updated.username} Updated"


async def user_has_notes(store: DocumentStore, user_id: str) -> bool:
    return await store.find_one(Note, user=user_id) is not None


async def delete_user(store: DocumentStore, user_id: str | None) -> str:
    if not _is_text(user_id):
        raise ValidationError("User ID Required")

    if await user_has_notes(store, user_id):
        raise DependencyError("User has assigned notes")

    user = await store.find_by_id(User, user_id)
    if user is None:
        raise NotFoundError("User Not Found")

    result = await store.delete_one(user)
    logger.info("Deleted user %s (%s)", result.username, result.id)
    return f"Username {result.username} With ID {result.id} deleted"

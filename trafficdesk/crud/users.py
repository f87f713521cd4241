"""CRUD helpers for the user directory."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import ValidationError
from ..models.user import User
from ..schemas.user import UserForm, UserOut
from .base import not_found, parse_uuid, persisting

CREATE_REQUIRED_MESSAGE = "Full name and email are required"
UPDATE_REQUIRED_MESSAGE = "ID, full name, and email are required"
DELETE_REQUIRED_MESSAGE = "User ID is required"
CREATE_FAILED_MESSAGE = "Failed to create user"
UPDATE_FAILED_MESSAGE = "Failed to update user"
DELETE_FAILED_MESSAGE = "Failed to delete user"


def list_users(db: Session) -> list[User]:
    stmt = select(User).order_by(User.full_name, User.email)
    return list(db.execute(stmt).scalars().all())


def get_user(db: Session, user_id) -> User | None:
    parsed = parse_uuid(user_id)
    if parsed is None:
        return None
    return db.get(User, parsed)


def create_user(db: Session, form: UserForm) -> UserOut:
    echo = form.echo()
    if not form.full_name or not form.email:
        raise ValidationError(CREATE_REQUIRED_MESSAGE, echo=echo)

    user = User(
        full_name=form.full_name,
        email=form.email,
        phone_number=form.phone_number,
        address=form.address,
    )
    with persisting(db, CREATE_FAILED_MESSAGE, echo=echo):
        db.add(user)
    db.refresh(user)
    return UserOut.model_validate(user)


def update_user(db: Session, user_id: str | None, form: UserForm) -> UserOut:
    """Overwrite name and email, and whichever optional fields were submitted.

    A submitted blank phone number or address clears it; an omitted one is kept.
    """

    echo = form.echo()
    if not user_id or not form.full_name or not form.email:
        raise ValidationError(UPDATE_REQUIRED_MESSAGE, echo=echo)

    with persisting(db, UPDATE_FAILED_MESSAGE, echo=echo):
        user = get_user(db, user_id)
        if user is None:
            raise not_found(UPDATE_FAILED_MESSAGE, "user", user_id, echo=echo)
        user.full_name = form.full_name
        user.email = form.email
        # Optional fields left out of the form keep their stored value.
        for column in ("phone_number", "address"):
            if column in form.model_fields_set:
                setattr(user, column, getattr(form, column))
    db.refresh(user)
    return UserOut.model_validate(user)


def delete_user(db: Session, user_id: str | None) -> UserOut:
    """Delete a user; the database cascades the delete to their tickets."""

    if not user_id:
        raise ValidationError(DELETE_REQUIRED_MESSAGE)

    with persisting(db, DELETE_FAILED_MESSAGE):
        user = get_user(db, user_id)
        if user is None:
            raise not_found(DELETE_FAILED_MESSAGE, "user", user_id)
        deleted = UserOut.model_validate(user)
        db.delete(user)
    return deleted

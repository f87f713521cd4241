"""Pydantic schemas for user form submissions and user records."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from .common import CamelModel, FormModel


class UserForm(FormModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None


class UserOut(CamelModel):
    id: UUID
    full_name: str
    email: str
    phone_number: Optional[str] = None
    address: Optional[str] = None


class UsersPage(CamelModel):
    users: list[UserOut]

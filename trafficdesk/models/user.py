"""SQLAlchemy model for registered users who can be issued tickets."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, Text, Uuid
from sqlalchemy.orm import relationship

from ..db.session import Base


class User(Base):
    __tablename__ = "users"
    __allow_unmapped__ = True

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    phone_number = Column(Text, nullable=True)
    address = Column(Text, nullable=True)

    # The database removes tickets when their owner goes away; the ORM must not
    # try to null out ``user_id`` first.
    tickets = relationship(
        "TrafficTicket",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["User"]

"""SQLAlchemy model for traffic tickets issued to a user."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from ..core.ticket_status import DEFAULT_TICKET_STATUS, TICKET_STATUS_CHOICES
from ..db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TrafficTicket(Base):
    __tablename__ = "traffic_tickets"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    license_plate = Column(Text, nullable=False, index=True)
    violation_type = Column(Text, nullable=False)
    fine_amount = Column(Integer, nullable=False)
    date_issued = Column(DateTime, nullable=False, default=_utcnow)
    status = Column(
        Enum(*TICKET_STATUS_CHOICES, name="ticket_status"),
        nullable=False,
        default=DEFAULT_TICKET_STATUS,
    )

    user = relationship("User", back_populates="tickets")


__all__ = ["TrafficTicket"]

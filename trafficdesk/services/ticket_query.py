"""Filtered and sorted ticket listing joined with the owning user's name.

``TicketQuery`` accumulates predicates and an ordering on a single
``SELECT ... FROM traffic_tickets LEFT OUTER JOIN users`` and executes it
once. Every clause is optional:

* ``search`` narrows to licence plates containing the term,
* ``status`` keeps tickets with exactly that status,
* ``sort_by``/``sort_order`` order by issue date or fine amount.

An unrecognised ``sort_by`` leaves the statement unordered, so rows come
back in whatever order the database chooses.
"""

from __future__ import annotations

from sqlalchemy import Select, asc, desc, select
from sqlalchemy.orm import Session

from ..models.traffic_ticket import TrafficTicket
from ..models.user import User
from ..schemas.traffic_ticket import (
    SORT_BY_DATE_ISSUED,
    SORT_BY_FINE_AMOUNT,
    SORT_ORDER_DESC,
    TicketRow,
    TicketSearchParams,
)

SORT_COLUMNS = {
    SORT_BY_DATE_ISSUED: TrafficTicket.date_issued,
    SORT_BY_FINE_AMOUNT: TrafficTicket.fine_amount,
}


class TicketQuery:
    def __init__(self) -> None:
        self._stmt: Select = select(
            TrafficTicket.id,
            TrafficTicket.user_id,
            User.full_name.label("user_name"),
            TrafficTicket.license_plate,
            TrafficTicket.violation_type,
            TrafficTicket.fine_amount,
            TrafficTicket.date_issued,
            TrafficTicket.status,
        ).select_from(TrafficTicket).outerjoin(User, TrafficTicket.user_id == User.id)

    @classmethod
    def from_params(cls, params: TicketSearchParams) -> "TicketQuery":
        return (
            cls()
            .search_plate(params.search)
            .with_status(params.status)
            .order_by(params.sort_by, params.sort_order)
        )

    def search_plate(self, term: str | None) -> "TicketQuery":
        if term:
            self._stmt = self._stmt.where(TrafficTicket.license_plate.contains(term, autoescape=True))
        return self

    def with_status(self, status: str | None) -> "TicketQuery":
        if status:
            self._stmt = self._stmt.where(TrafficTicket.status == status)
        return self

    def order_by(self, sort_by: str | None, sort_order: str | None) -> "TicketQuery":
        column = SORT_COLUMNS.get(sort_by or "")
        if column is None:
            return self
        direction = desc if sort_order == SORT_ORDER_DESC else asc
        # Tie-break on id so equal dates/fines list in a stable order.
        self._stmt = self._stmt.order_by(direction(column), direction(TrafficTicket.id))
        return self

    @property
    def statement(self) -> Select:
        return self._stmt

    def all(self, db: Session) -> list[TicketRow]:
        rows = db.execute(self._stmt).mappings().all()
        return [TicketRow.model_validate(dict(row)) for row in rows]


def list_ticket_rows(db: Session, params: TicketSearchParams) -> list[TicketRow]:
    return TicketQuery.from_params(params).all(db)

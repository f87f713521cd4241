"""Pydantic schemas for ticket forms, partial updates, listings and page data."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel, FormModel
from .user import UserOut

SORT_BY_DATE_ISSUED = "dateIssued"
SORT_BY_FINE_AMOUNT = "fineAmount"
SORT_ORDER_ASC = "asc"
SORT_ORDER_DESC = "desc"


class TicketForm(FormModel):
    user_id: Optional[str] = None
    license_plate: Optional[str] = None
    violation_type: Optional[str] = None
    fine_amount: Optional[str] = None
    status: Optional[str] = None


class TicketChanges(CamelModel):
    """Validated subset of ticket columns to overwrite; ``None`` means keep."""

    user_id: Optional[UUID] = None
    license_plate: Optional[str] = None
    violation_type: Optional[str] = None
    fine_amount: Optional[int] = None
    status: Optional[str] = None

    def to_columns(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.to_columns()


class TicketOut(CamelModel):
    id: int
    user_id: UUID
    license_plate: str
    violation_type: str
    fine_amount: int
    date_issued: datetime
    status: str


class TicketRow(TicketOut):
    """A listing row: the ticket plus its owner's name from the left join."""

    user_id: Optional[UUID] = None
    user_name: Optional[str] = None


class TicketSearchParams(CamelModel):
    search: str = ""
    sort_by: str = SORT_BY_DATE_ISSUED
    sort_order: str = SORT_ORDER_DESC
    status: str = ""

    @classmethod
    def from_query(
        cls,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        status: str | None = None,
    ) -> "TicketSearchParams":
        """Blank or missing query values fall back to the defaults."""

        return cls(
            search=search or "",
            sort_by=sort_by or SORT_BY_DATE_ISSUED,
            sort_order=sort_order or SORT_ORDER_DESC,
            status=status or "",
        )


class TicketsPage(CamelModel):
    tickets: list[TicketRow] = Field(default_factory=list)
    users: list[UserOut] = Field(default_factory=list)
    search_params: TicketSearchParams = Field(default_factory=TicketSearchParams)

"""Load handlers for the users and tickets pages.

Both loaders are read paths: a storage failure is logged and replaced by an
empty page so the listing never hard-fails.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..crud.users import list_users
from ..schemas.traffic_ticket import TicketSearchParams, TicketsPage
from ..schemas.user import UserOut, UsersPage
from .ticket_query import list_ticket_rows

logger = logging.getLogger(__name__)


def load_users_page(db: Session) -> UsersPage:
    try:
        users = list_users(db)
    except SQLAlchemyError:
        logger.exception("Failed to load users")
        db.rollback()
        return UsersPage(users=[])
    return UsersPage(users=[UserOut.model_validate(user) for user in users])


def load_tickets_page(db: Session, params: TicketSearchParams | None = None) -> TicketsPage:
    params = params or TicketSearchParams()
    try:
        tickets = list_ticket_rows(db, params)
        users = list_users(db)
    except SQLAlchemyError:
        logger.exception(
            "Failed to load tickets",
            extra={"extra_data": {"search_params": params.model_dump(by_alias=True)}},
        )
        db.rollback()
        return TicketsPage()
    return TicketsPage(
        tickets=tickets,
        users=[UserOut.model_validate(user) for user in users],
        search_params=params,
    )

"""Read-only JSON views of the page data for headless clients."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..schemas.traffic_ticket import TicketSearchParams, TicketsPage
from ..schemas.user import UsersPage
from ..services.pages import load_tickets_page, load_users_page
from .tickets import ticket_search_params

router = APIRouter(prefix="/api/v1", tags=["api"])


@router.get("/users", response_model=UsersPage)
def api_list_users(db: Session = Depends(get_db)):
    return load_users_page(db)


@router.get("/tickets", response_model=TicketsPage)
def api_list_tickets(
    params: TicketSearchParams = Depends(ticket_search_params),
    db: Session = Depends(get_db),
):
    return load_tickets_page(db, params)

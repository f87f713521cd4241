"""Ticket listing page and the ticket form actions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..core.jinja import get_templates
from ..core.ticket_status import TICKET_STATUS_CHOICES
from ..crud.tickets import create_ticket, delete_ticket, update_ticket, update_ticket_status
from ..db.session import get_db
from ..schemas.common import action_success
from ..schemas.traffic_ticket import TicketForm, TicketSearchParams
from ..services.pages import load_tickets_page

templates = get_templates()

router = APIRouter(tags=["tickets"])


def ticket_search_params(
    search: str | None = Query(default=None),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    status: str | None = Query(default=None),
) -> TicketSearchParams:
    return TicketSearchParams.from_query(search, sort_by, sort_order, status)


@router.get("/tickets", response_class=HTMLResponse)
def tickets_page(
    request: Request,
    params: TicketSearchParams = Depends(ticket_search_params),
    db: Session = Depends(get_db),
):
    page = load_tickets_page(db, params)
    context = {
        "tickets": page.tickets,
        "users": page.users,
        "search_params": page.search_params,
        "status_choices": TICKET_STATUS_CHOICES,
    }
    return templates.TemplateResponse(request, "tickets.html", context)


@router.post("/tickets/create")
def create_ticket_action(
    user_id: str | None = Form(None, alias="userId"),
    license_plate: str | None = Form(None, alias="licensePlate"),
    violation_type: str | None = Form(None, alias="violationType"),
    fine_amount: str | None = Form(None, alias="fineAmount"),
    status: str | None = Form(None),
    db: Session = Depends(get_db),
):
    form = TicketForm(
        user_id=user_id,
        license_plate=license_plate,
        violation_type=violation_type,
        fine_amount=fine_amount,
        status=status,
    )
    return action_success("ticket", create_ticket(db, form))


@router.post("/tickets/update-status")
@router.post("/tickets/updateStatus")  # compat
def update_ticket_status_action(
    ticket_id: str | None = Form(None, alias="id"),
    status: str | None = Form(None),
    db: Session = Depends(get_db),
):
    return action_success("ticket", update_ticket_status(db, ticket_id, status))


@router.post("/tickets/update")
def update_ticket_action(
    ticket_id: str | None = Form(None, alias="id"),
    user_id: str | None = Form(None, alias="userId"),
    license_plate: str | None = Form(None, alias="licensePlate"),
    violation_type: str | None = Form(None, alias="violationType"),
    fine_amount: str | None = Form(None, alias="fineAmount"),
    status: str | None = Form(None),
    db: Session = Depends(get_db),
):
    form = TicketForm(
        user_id=user_id,
        license_plate=license_plate,
        violation_type=violation_type,
        fine_amount=fine_amount,
        status=status,
    )
    return action_success("ticket", update_ticket(db, ticket_id, form))


@router.post("/tickets/delete")
def delete_ticket_action(ticket_id: str | None = Form(None, alias="id"), db: Session = Depends(get_db)):
    return action_success("ticket", delete_ticket(db, ticket_id))

"""CRUD helpers for the traffic ticket registry."""

from __future__ import annotations

from sqlalchemy.orm import Session

from ..core.errors import ValidationError
from ..core.ticket_status import DEFAULT_TICKET_STATUS, INVALID_STATUS_MESSAGE, is_valid_status
from ..models.traffic_ticket import TrafficTicket
from ..schemas.traffic_ticket import TicketChanges, TicketForm, TicketOut
from .base import INTEGER_MAX, not_found, parse_uuid, parse_whole_number, persisting

INVALID_TICKET_MESSAGE = "Invalid ticket information"
STATUS_REQUIRED_MESSAGE = "Ticket ID and status are required"
ID_REQUIRED_MESSAGE = "Ticket ID is required"
FINE_NOT_NUMBER_MESSAGE = "Fine amount must be a number"
NO_FIELDS_MESSAGE = "No valid fields provided for update"
CREATE_FAILED_MESSAGE = "Failed to create ticket"
STATUS_FAILED_MESSAGE = "Failed to update ticket status"
UPDATE_FAILED_MESSAGE = "Failed to update ticket details"
DELETE_FAILED_MESSAGE = "Failed to delete ticket"


def parse_ticket_id(value: str | int | None) -> int | None:
    if isinstance(value, int):
        ticket_id = value
    else:
        ticket_id = parse_whole_number(value)
    if ticket_id is None or not 0 < ticket_id <= INTEGER_MAX:
        return None
    return ticket_id


def get_ticket(db: Session, ticket_id: int) -> TrafficTicket | None:
    return db.get(TrafficTicket, ticket_id)


def _require_ticket(db: Session, ticket_id: int, message: str) -> TrafficTicket:
    ticket = get_ticket(db, ticket_id)
    if ticket is None:
        raise not_found(message, "ticket", ticket_id)
    return ticket


def create_ticket(db: Session, form: TicketForm) -> TicketOut:
    status = form.status or DEFAULT_TICKET_STATUS
    echo = {**form.echo(), "status": status}
    if not is_valid_status(status):
        raise ValidationError(INVALID_STATUS_MESSAGE, echo=echo)

    fine_amount = parse_whole_number(form.fine_amount)
    if not form.user_id or not form.license_plate or not form.violation_type or fine_amount is None:
        raise ValidationError(INVALID_TICKET_MESSAGE, echo=echo)

    with persisting(db, CREATE_FAILED_MESSAGE, echo=echo):
        user_id = parse_uuid(form.user_id)
        if user_id is None:
            raise not_found(CREATE_FAILED_MESSAGE, "user", form.user_id, echo=echo)
        ticket = TrafficTicket(
            user_id=user_id,
            license_plate=form.license_plate,
            violation_type=form.violation_type,
            fine_amount=fine_amount,
            status=status,
        )
        db.add(ticket)
    db.refresh(ticket)
    return TicketOut.model_validate(ticket)


def update_ticket_status(db: Session, ticket_id: str | int | None, status: str | None) -> TicketOut:
    parsed_id = parse_ticket_id(ticket_id)
    status = (status or "").strip() or None
    if parsed_id is None or not status:
        raise ValidationError(STATUS_REQUIRED_MESSAGE)
    if not is_valid_status(status):
        raise ValidationError(INVALID_STATUS_MESSAGE)

    with persisting(db, STATUS_FAILED_MESSAGE):
        ticket = _require_ticket(db, parsed_id, STATUS_FAILED_MESSAGE)
        ticket.status = status
    db.refresh(ticket)
    return TicketOut.model_validate(ticket)


def build_ticket_changes(form: TicketForm) -> TicketChanges:
    """Validate the supplied fields of a partial update.

    Raises ``ValidationError`` for a malformed fine amount, an unknown status,
    or when nothing usable was supplied.
    """

    fine_amount = None
    if form.fine_amount is not None:
        fine_amount = parse_whole_number(form.fine_amount)
        if fine_amount is None:
            raise ValidationError(FINE_NOT_NUMBER_MESSAGE)
    if form.status is not None and not is_valid_status(form.status):
        raise ValidationError(INVALID_STATUS_MESSAGE)

    changes = TicketChanges(
        license_plate=form.license_plate,
        violation_type=form.violation_type,
        fine_amount=fine_amount,
        status=form.status,
    )
    if changes.is_empty and form.user_id is None:
        raise ValidationError(NO_FIELDS_MESSAGE)
    return changes


def update_ticket(db: Session, ticket_id: str | int | None, form: TicketForm) -> TicketOut:
    """Overwrite only the fields present in ``form``; everything else is kept."""

    parsed_id = parse_ticket_id(ticket_id)
    if parsed_id is None:
        raise ValidationError(ID_REQUIRED_MESSAGE)
    changes = build_ticket_changes(form)

    with persisting(db, UPDATE_FAILED_MESSAGE):
        if form.user_id is not None:
            user_id = parse_uuid(form.user_id)
            if user_id is None:
                raise not_found(UPDATE_FAILED_MESSAGE, "user", form.user_id)
            changes.user_id = user_id
        ticket = _require_ticket(db, parsed_id, UPDATE_FAILED_MESSAGE)
        for column, value in changes.to_columns().items():
            setattr(ticket, column, value)
    db.refresh(ticket)
    return TicketOut.model_validate(ticket)


def delete_ticket(db: Session, ticket_id: str | int | None) -> TicketOut:
    parsed_id = parse_ticket_id(ticket_id)
    if parsed_id is None:
        raise ValidationError(ID_REQUIRED_MESSAGE)

    with persisting(db, DELETE_FAILED_MESSAGE):
        ticket = _require_ticket(db, parsed_id, DELETE_FAILED_MESSAGE)
        deleted = TicketOut.model_validate(ticket)
        db.delete(ticket)
    return deleted

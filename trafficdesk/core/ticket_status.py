"""Shared ticket status constants and helpers."""

TICKET_STATUS_UNPAID = "unpaid"
TICKET_STATUS_PAID = "paid"

TICKET_STATUS_CHOICES = (
    TICKET_STATUS_UNPAID,
    TICKET_STATUS_PAID,
)

DEFAULT_TICKET_STATUS = TICKET_STATUS_UNPAID

INVALID_STATUS_MESSAGE = 'Invalid status value. Allowed values are "unpaid" or "paid".'


def is_valid_status(value: str | None) -> bool:
    return value in TICKET_STATUS_CHOICES


__all__ = [
    "DEFAULT_TICKET_STATUS",
    "INVALID_STATUS_MESSAGE",
    "TICKET_STATUS_CHOICES",
    "TICKET_STATUS_PAID",
    "TICKET_STATUS_UNPAID",
    "is_valid_status",
]

"""Ticket listing: search, status filter, sorting and the page loader."""

import os
import sys
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DB_URL", "sqlite://")

from trafficdesk.crud.tickets import create_ticket, get_ticket
from trafficdesk.crud.users import create_user
from trafficdesk.db.session import Base, enable_sqlite_foreign_keys
from trafficdesk.schemas.traffic_ticket import TicketForm, TicketSearchParams
from trafficdesk.schemas.user import UserForm
from trafficdesk.services.pages import load_tickets_page
from trafficdesk.services.ticket_query import TicketQuery, list_ticket_rows


@pytest.fixture()
def db_session():
    engine = enable_sqlite_foreign_keys(
        create_engine("sqlite://", connect_args={"check_same_thread": False})
    )
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded(db_session):
    """Four tickets across two owners with distinct fines and issue dates."""

    alice = create_user(db_session, UserForm(full_name="Alice Example", email="alice@example.com"))
    bob = create_user(db_session, UserForm(full_name="Bob Example", email="bob@example.com"))
    specs = [
        (alice, "ABC123", "Speeding", "200", "paid", datetime(2024, 1, 10)),
        (alice, "XABC1234", "Parking", "50", "unpaid", datetime(2024, 3, 5)),
        (bob, "ABC123", "Red light", "120", "unpaid", datetime(2024, 2, 1)),
        (bob, "ZZZ999", "Speeding", "80", "paid", datetime(2024, 4, 20)),
    ]
    ids = {}
    for owner, plate, violation, fine, status, issued in specs:
        ticket = create_ticket(
            db_session,
            TicketForm(
                user_id=str(owner.id),
                license_plate=plate,
                violation_type=violation,
                fine_amount=fine,
                status=status,
            ),
        )
        get_ticket(db_session, ticket.id).date_issued = issued
        ids[(plate, violation)] = ticket.id
    db_session.commit()
    return ids


def _rows(db_session, **query):
    return list_ticket_rows(db_session, TicketSearchParams.from_query(**query))


def test_default_listing_is_newest_first_with_owner_names(db_session, seeded):
    rows = _rows(db_session)

    assert [row.date_issued for row in rows] == sorted((row.date_issued for row in rows), reverse=True)
    assert rows[0].license_plate == "ZZZ999"
    assert rows[0].user_name == "Bob Example"
    assert {row.user_name for row in rows} == {"Alice Example", "Bob Example"}


def test_search_matches_plate_substring(db_session, seeded):
    rows = _rows(db_session, search="ABC123")

    assert sorted(row.license_plate for row in rows) == ["ABC123", "ABC123", "XABC1234"]


def test_search_and_status_filters_intersect(db_session, seeded):
    rows = _rows(db_session, search="ABC123", status="paid")

    assert [(row.license_plate, row.violation_type) for row in rows] == [("ABC123", "Speeding")]


def test_status_filter_alone(db_session, seeded):
    rows = _rows(db_session, status="unpaid")

    assert {row.status for row in rows} == {"unpaid"}
    assert len(rows) == 2


def test_search_treats_wildcards_literally(db_session, seeded):
    assert _rows(db_session, search="%") == []
    assert _rows(db_session, search="A_C") == []


def test_sort_by_fine_amount_ascending(db_session, seeded):
    rows = _rows(db_session, sort_by="fineAmount", sort_order="asc")

    fines = [row.fine_amount for row in rows]
    assert fines == sorted(fines)
    assert fines == [50, 80, 120, 200]


def test_sort_by_fine_amount_descending(db_session, seeded):
    rows = _rows(db_session, sort_by="fineAmount", sort_order="desc")

    assert [row.fine_amount for row in rows] == [200, 120, 80, 50]


def test_sort_by_date_ascending(db_session, seeded):
    rows = _rows(db_session, sort_by="dateIssued", sort_order="asc")

    assert [row.date_issued.month for row in rows] == [1, 2, 3, 4]


def test_unknown_sort_column_applies_no_ordering(db_session, seeded):
    query = TicketQuery.from_params(TicketSearchParams.from_query(sort_by="violationType"))

    assert query.statement._order_by_clauses == ()
    assert len(query.all(db_session)) == 4


def test_unknown_sort_order_falls_back_to_ascending(db_session, seeded):
    rows = _rows(db_session, sort_by="fineAmount", sort_order="sideways")

    assert [row.fine_amount for row in rows] == [50, 80, 120, 200]


def test_search_params_default_blank_values():
    params = TicketSearchParams.from_query(search="", sort_by="", sort_order=None, status="")

    assert params.model_dump(by_alias=True) == {
        "search": "",
        "sortBy": "dateIssued",
        "sortOrder": "desc",
        "status": "",
    }


def test_load_tickets_page_echoes_params_and_lists_users(db_session, seeded):
    params = TicketSearchParams.from_query(search="ZZZ", sort_by="fineAmount", sort_order="asc")

    page = load_tickets_page(db_session, params)

    assert [row.license_plate for row in page.tickets] == ["ZZZ999"]
    assert [user.full_name for user in page.users] == ["Alice Example", "Bob Example"]
    assert page.search_params == params


def test_load_tickets_page_returns_empty_page_on_storage_failure():
    # No tables were created, so the listing query fails at the database.
    engine = create_engine("sqlite://")
    session = sessionmaker(bind=engine)()
    params = TicketSearchParams.from_query(search="ABC123", status="paid", sort_by="fineAmount")
    try:
        page = load_tickets_page(session, params)
    finally:
        session.close()

    assert page.tickets == []
    assert page.users == []
    assert page.search_params == TicketSearchParams()

"""User directory page and its form actions.

Actions answer with ``{"success": true, "user": {...}}``; failures are raised
as ``ActionError`` and rendered by the handler registered in ``main``.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..core.jinja import get_templates
from ..crud.users import create_user, delete_user, update_user
from ..db.session import get_db
from ..schemas.common import action_success
from ..schemas.user import UserForm
from ..services.pages import load_users_page

templates = get_templates()

router = APIRouter(tags=["users"])


async def submitted_fields(request: Request) -> frozenset[str]:
    """Names of the fields present in the form body, blank ones included.

    ``Form(None)`` parameters read a blank value as missing, so they cannot
    tell an emptied field from one the form never sent.
    """

    form = await request.form()
    return frozenset(form.keys())


@router.get("/users", response_class=HTMLResponse)
def users_page(request: Request, db: Session = Depends(get_db)):
    page = load_users_page(db)
    return templates.TemplateResponse(request, "users.html", {"users": page.users})


@router.post("/users/create")
def create_user_action(
    full_name: str | None = Form(None, alias="fullName"),
    email: str | None = Form(None),
    phone_number: str | None = Form(None, alias="phoneNumber"),
    address: str | None = Form(None),
    db: Session = Depends(get_db),
):
    form = UserForm(full_name=full_name, email=email, phone_number=phone_number, address=address)
    return action_success("user", create_user(db, form))


@router.post("/users/update")
def update_user_action(
    user_id: str | None = Form(None, alias="id"),
    full_name: str | None = Form(None, alias="fullName"),
    email: str | None = Form(None),
    phone_number: str | None = Form(None, alias="phoneNumber"),
    address: str | None = Form(None),
    submitted: frozenset[str] = Depends(submitted_fields),
    db: Session = Depends(get_db),
):
    values = {"full_name": full_name, "email": email}
    if "phoneNumber" in submitted:
        values["phone_number"] = phone_number or ""
    if "address" in submitted:
        values["address"] = address or ""
    form = UserForm(**values)
    return action_success("user", update_user(db, (user_id or "").strip() or None, form))


@router.post("/users/delete")
def delete_user_action(user_id: str | None = Form(None, alias="id"), db: Session = Depends(get_db)):
    return action_success("user", delete_user(db, (user_id or "").strip() or None))

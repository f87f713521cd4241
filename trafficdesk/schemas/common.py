"""Base classes shared by the form and output schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class FormModel(CamelModel):
    """Raw form submission: every field is an optional, stripped string."""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, str):
            value = str(value)
        value = value.strip()
        return value or None

    def echo(self) -> dict[str, str]:
        """Submitted values keyed by wire name, for re-populating the form."""

        return self.model_dump(by_alias=True, exclude_none=True)


def action_success(entity: str, record: BaseModel) -> dict[str, Any]:
    """Payload returned by a form action that completed."""

    return {"success": True, entity: record.model_dump(mode="json", by_alias=True)}

"""Customer-request input and output models."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from linearview.models.enums import Priority


class IssueCreationRequest(BaseModel):
    """A customer request to be filed as a new issue in a project."""

    project_id: str
    title: str
    description: str
    customer_name: str
    priority: Priority = Priority.MEDIUM

    model_config = {"frozen": True}

    @field_validator("project_id", "title", "description", "customer_name")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class CreatedIssueRef(BaseModel):
    """Identifier and title of an issue created through the API."""

    id: str
    title: str

"""Customer-request intake."""

from linearview.intake.submit import (
    CUSTOMER_REQUEST_LABEL,
    CUSTOMER_REQUEST_LABEL_COLOR,
    IssueCreation,
    IssueGateway,
    format_description,
    format_title,
)

__all__ = [
    "CUSTOMER_REQUEST_LABEL",
    "CUSTOMER_REQUEST_LABEL_COLOR",
    "IssueCreation",
    "IssueGateway",
    "format_description",
    "format_title",
]

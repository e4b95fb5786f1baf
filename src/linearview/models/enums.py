"""Enumerated types used across linear-view."""

from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    """Issue priority as offered on the customer-request form.

    The Linear API encodes priority as a small integer. The mapping is fixed
    and must not be derived from declaration order; use :meth:`to_wire` and
    :meth:`from_wire`.
    """

    NO_PRIORITY = "NO_PRIORITY"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    def to_wire(self) -> int:
        return _PRIORITY_TO_WIRE[self]

    @classmethod
    def from_wire(cls, value: int) -> Priority:
        try:
            return _WIRE_TO_PRIORITY[value]
        except KeyError:
            raise ValueError(f"unknown priority wire value: {value!r}") from None


_PRIORITY_TO_WIRE: dict[Priority, int] = {
    Priority.NO_PRIORITY: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}
_WIRE_TO_PRIORITY: dict[int, Priority] = {wire: priority for priority, wire in _PRIORITY_TO_WIRE.items()}


class StateType(StrEnum):
    """Workflow state category reported by Linear."""

    TRIAGE = "triage"
    BACKLOG = "backlog"
    UNSTARTED = "unstarted"
    STARTED = "started"
    COMPLETED = "completed"
    CANCELED = "canceled"

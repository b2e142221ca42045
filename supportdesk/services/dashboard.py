"""
Read-and-derive helpers for the owner dashboard. Nothing here touches the database.
"""
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Iterable, List, Optional, Sequence

from supportdesk.services.catalog import FALLBACK_COLOR, StatusDefinition

UNKNOWN_STATUS_DESCRIPTION = "Unknown status"


@dataclass(frozen=True)
class StatusView:
    name: str
    description: str
    color: str
    known: bool


@dataclass(frozen=True)
class StatusCount:
    name: str
    count: int
    color: str
    known: bool


def resolve_status(name: str, definitions: Sequence[StatusDefinition]) -> StatusView:
    """First definition with a matching name wins; anything else gets the gray fallback."""
    for definition in definitions:
        if definition.name == name:
            return StatusView(
                name=name,
                description=definition.description or "",
                color=definition.color or FALLBACK_COLOR,
                known=True,
            )
    return StatusView(name=name, description=UNKNOWN_STATUS_DESCRIPTION, color=FALLBACK_COLOR, known=False)


def local_day(created_at: datetime, tz: tzinfo) -> date:
    # SQLite hands back naive datetimes; they were written as UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.astimezone(tz).date()


def filter_tickets(
    tickets: Iterable,
    status: Optional[str] = None,
    day: Optional[date] = None,
    tz: tzinfo = timezone.utc,
) -> List:
    """
    Keep tickets whose status equals ``status`` and whose creation time falls on
    ``day`` in ``tz``. Either filter may be None. Both are plain predicates over
    the same list, so applying them in either order gives the same result, and
    input order is preserved.
    """
    result = list(tickets)
    if status is not None:
        result = [t for t in result if t.status == status]
    if day is not None:
        result = [t for t in result if local_day(t.created_at, tz) == day]
    return result


def status_counts(tickets: Iterable, definitions: Sequence[StatusDefinition]) -> List[StatusCount]:
    """
    One entry per distinct status name: configured ones first (zero counts
    included), then statuses seen only on tickets, in first-seen order.
    The counts always add up to the number of tickets.
    """
    counts = {}
    for definition in definitions:
        counts.setdefault(definition.name, 0)
    for ticket in tickets:
        counts[ticket.status] = counts.get(ticket.status, 0) + 1

    result = []
    for name, count in counts.items():
        view = resolve_status(name, definitions)
        result.append(StatusCount(name=name, count=count, color=view.color, known=view.known))
    return result

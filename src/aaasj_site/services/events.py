"""Services for the events CMS."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import uuid4

from aaasj_site.domain.events import EventItem, EventStatus
from aaasj_site.errors import InvalidRequestError, NotFoundError

_logger = logging.getLogger(__name__)

_TEXT_FIELDS = (
    "title",
    "date",
    "time",
    "location",
    "description",
    "image",
    "category",
    "link",
)


class EventRepository(Protocol):
    """Persistence interface for CMS events."""

    def list_events(self) -> list[EventItem]:
        """Return every stored event in storage order."""

    def add_events(self, events: list[EventItem]) -> None:
        """Append events to the store."""

    def replace_event(self, event: EventItem) -> None:
        """Replace the stored event that has the same id."""

    def delete_event(self, event_id: str) -> bool:
        """Delete an event by id and report whether it existed."""


@dataclass(frozen=True)
class ImportSummary:
    """Result of merging the site catalogue into the store."""

    added: int
    total: int


@dataclass
class EventService:
    """Application service for event CRUD."""

    repository: EventRepository
    site_events: Iterable[EventItem] = ()

    def list_events(self) -> list[EventItem]:
        """Return upcoming events soonest first, then past events newest first."""
        events = self.repository.list_events()
        upcoming = [event for event in events if event.status == "upcoming"]
        past = [event for event in events if event.status != "upcoming"]
        upcoming.sort(key=lambda event: _date_sort_key(event, newest_first=False))
        past.sort(key=lambda event: _date_sort_key(event, newest_first=True))
        return upcoming + past

    def create_event(self, payload: dict[str, object]) -> EventItem:
        """Create an event from a request payload."""
        if not payload.get("title") or not payload.get("date"):
            raise InvalidRequestError("Missing required fields: title, date")
        fields = {
            name: str(payload[name]) if payload.get(name) else None
            for name in _TEXT_FIELDS
        }
        registration_disabled = payload.get("registrationDisabled")
        event = EventItem(
            id=str(uuid4()),
            status=_coerce_status(payload.get("status")) or "upcoming",
            registration_disabled=(
                bool(registration_disabled)
                if registration_disabled is not None
                else None
            ),
            **fields,
        )
        self.repository.add_events([event])
        _logger.info("Created event %s (%s)", event.id, event.title)
        return event

    def update_event(self, payload: dict[str, object]) -> EventItem:
        """Merge the payload over the stored event with the same id."""
        event_id = payload.get("id")
        if not event_id:
            raise InvalidRequestError("Missing id")
        current = self._find(str(event_id))
        if current is None:
            raise NotFoundError("Not found")
        changes: dict[str, object] = {
            name: str(payload[name])
            for name in _TEXT_FIELDS
            if payload.get(name) is not None
        }
        if payload.get("registrationDisabled") is not None:
            changes["registration_disabled"] = bool(payload["registrationDisabled"])
        status = _coerce_status(payload.get("status"))
        if status is not None:
            changes["status"] = status
        updated = replace(current, **changes)
        self.repository.replace_event(updated)
        return updated

    def delete_event(self, event_id: str | None) -> None:
        """Delete an event; unknown ids are ignored."""
        if not event_id:
            raise InvalidRequestError("Missing id")
        if not self.repository.delete_event(event_id):
            _logger.info("Delete requested for unknown event %s", event_id)

    def import_site_events(self) -> ImportSummary:
        """Add catalogue events whose title and date are not stored yet."""
        existing = self.repository.list_events()
        existing_keys = {event.merge_key for event in existing}
        to_add = [
            event for event in self.site_events if event.merge_key not in existing_keys
        ]
        if to_add:
            self.repository.add_events(to_add)
        return ImportSummary(added=len(to_add), total=len(existing) + len(to_add))

    def _find(self, event_id: str) -> EventItem | None:
        for event in self.repository.list_events():
            if event.id == event_id:
                return event
        return None


def _coerce_status(value: object) -> EventStatus | None:
    if value == "past":
        return "past"
    if value == "upcoming":
        return "upcoming"
    return None


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _date_sort_key(event: EventItem, *, newest_first: bool) -> tuple[int, int]:
    """Sort key placing undated events after dated ones."""
    parsed = _parse_date(event.date)
    if parsed is None:
        return (1, 0)
    ordinal = parsed.toordinal()
    return (0, -ordinal if newest_first else ordinal)

"""Domain models for CMS events."""

from dataclasses import dataclass
from typing import Literal

EventStatus = Literal["upcoming", "past"]

_OPTIONAL_TEXT_FIELDS = ("time", "location", "description", "image", "category", "link")


@dataclass(frozen=True)
class EventItem:
    """Represents an event shown on the events page."""

    id: str
    title: str
    date: str
    status: EventStatus = "upcoming"
    time: str | None = None
    location: str | None = None
    description: str | None = None
    image: str | None = None
    category: str | None = None
    link: str | None = None
    registration_disabled: bool | None = None

    @property
    def merge_key(self) -> str:
        """Key used to detect the same event across imports."""
        return f"{self.title}|{self.date}"


def event_from_dict(row: dict[str, object]) -> EventItem:
    """Build an event from its stored JSON representation."""
    optional = {
        name: str(row[name]) if row.get(name) is not None else None
        for name in _OPTIONAL_TEXT_FIELDS
    }
    registration_disabled = row.get("registrationDisabled")
    return EventItem(
        id=str(row["id"]),
        title=str(row.get("title", "")),
        date=str(row.get("date", "")),
        status="past" if row.get("status") == "past" else "upcoming",
        registration_disabled=(
            bool(registration_disabled) if registration_disabled is not None else None
        ),
        **optional,
    )


def event_to_dict(event: EventItem) -> dict[str, object]:
    """Serialize an event, omitting unset optional fields."""
    row: dict[str, object] = {
        "id": event.id,
        "title": event.title,
        "date": event.date,
    }
    for name in _OPTIONAL_TEXT_FIELDS:
        value = getattr(event, name)
        if value is not None:
            row[name] = value
    row["status"] = event.status
    if event.registration_disabled is not None:
        row["registrationDisabled"] = event.registration_disabled
    return row

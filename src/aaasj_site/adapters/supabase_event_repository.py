"""Supabase-backed event repository."""

from dataclasses import dataclass

from supabase import Client

from aaasj_site.domain.events import EventItem
from aaasj_site.services.events import EventRepository

_TABLE = "events"


@dataclass
class SupabaseEventRepository(EventRepository):
    """Supabase implementation for CMS event persistence."""

    client: Client

    def list_events(self) -> list[EventItem]:
        """Return every stored event."""
        response = self.client.table(_TABLE).select("*").execute()
        return [_parse_event(row) for row in response.data or []]

    def add_events(self, events: list[EventItem]) -> None:
        """Insert events."""
        if not events:
            return
        response = (
            self.client.table(_TABLE)
            .insert([_serialize_event(event) for event in events])
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to insert events")

    def replace_event(self, event: EventItem) -> None:
        """Overwrite the stored row with the same id."""
        payload = _serialize_event(event)
        payload.pop("id")
        self.client.table(_TABLE).update(payload).eq("id", event.id).execute()

    def delete_event(self, event_id: str) -> bool:
        """Delete an event row by id."""
        response = self.client.table(_TABLE).delete().eq("id", event_id).execute()
        return bool(response.data)


def _serialize_event(event: EventItem) -> dict[str, object]:
    return {
        "id": event.id,
        "title": event.title,
        "date": event.date,
        "time": event.time,
        "location": event.location,
        "description": event.description,
        "image": event.image,
        "category": event.category,
        "status": event.status,
        "link": event.link,
        "registration_disabled": event.registration_disabled,
    }


def _parse_event(row: dict[str, object]) -> EventItem:
    return EventItem(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        date=str(row.get("date") or ""),
        status="past" if row.get("status") == "past" else "upcoming",
        time=row.get("time"),
        location=row.get("location"),
        description=row.get("description"),
        image=row.get("image"),
        category=row.get("category"),
        link=row.get("link"),
        registration_disabled=row.get("registration_disabled"),
    )

"""Tests for the events service."""

import pytest

from aaasj_site.errors import InvalidRequestError, NotFoundError
from aaasj_site.services.events import EventService
from aaasj_site.site_events import SITE_ALL_EVENTS
from tests.conftest import InMemoryEventRepository, make_event


def test_list_events_orders_upcoming_then_past() -> None:
    repository = InMemoryEventRepository(
        events=[
            make_event("p-old", "2023-01-01", status="past"),
            make_event("u-late", "2025-12-01"),
            make_event("u-undated", "TBD"),
            make_event("p-new", "2024-06-01", status="past"),
            make_event("u-soon", "2025-10-01"),
        ]
    )
    service = EventService(repository)

    ids = [event.id for event in service.list_events()]

    assert ids == ["u-soon", "u-late", "u-undated", "p-new", "p-old"]


def test_create_event_requires_title_and_date() -> None:
    service = EventService(InMemoryEventRepository())

    with pytest.raises(InvalidRequestError, match="Missing required fields"):
        service.create_event({"title": "Picnic"})


def test_create_event_defaults_status_and_coerces_fields() -> None:
    repository = InMemoryEventRepository()
    service = EventService(repository)

    event = service.create_event(
        {"title": "Picnic", "date": "2025-07-04", "location": 12, "status": "later"}
    )

    assert event.status == "upcoming"
    assert event.location == "12"
    assert len(event.id) == 36
    assert repository.events == [event]


def test_update_event_merges_fields() -> None:
    repository = InMemoryEventRepository(events=[make_event("e1", "2025-01-01")])
    service = EventService(repository)

    updated = service.update_event(
        {"id": "e1", "location": "Library", "status": "past", "registrationDisabled": True}
    )

    assert updated.location == "Library"
    assert updated.status == "past"
    assert updated.registration_disabled is True
    assert updated.title == "Event e1"
    assert repository.events[0] == updated


def test_update_event_ignores_invalid_status() -> None:
    repository = InMemoryEventRepository(events=[make_event("e1", "2025-01-01")])
    service = EventService(repository)

    updated = service.update_event({"id": "e1", "status": "cancelled"})

    assert updated.status == "upcoming"


def test_update_event_errors() -> None:
    service = EventService(InMemoryEventRepository())

    with pytest.raises(InvalidRequestError, match="Missing id"):
        service.update_event({"title": "x"})
    with pytest.raises(NotFoundError):
        service.update_event({"id": "missing"})


def test_delete_event_is_idempotent() -> None:
    repository = InMemoryEventRepository(events=[make_event("e1", "2025-01-01")])
    service = EventService(repository)

    service.delete_event("e1")
    service.delete_event("e1")

    assert repository.events == []
    with pytest.raises(InvalidRequestError):
        service.delete_event(None)


def test_import_site_events_skips_existing() -> None:
    existing = SITE_ALL_EVENTS[0]
    repository = InMemoryEventRepository(
        events=[make_event("mine", existing.date, title=existing.title)]
    )
    service = EventService(repository, site_events=SITE_ALL_EVENTS)

    first = service.import_site_events()
    second = service.import_site_events()

    assert first.added == len(SITE_ALL_EVENTS) - 1
    assert first.total == len(SITE_ALL_EVENTS)
    assert second.added == 0
    assert second.total == len(SITE_ALL_EVENTS)


def test_site_catalogue_has_eight_events() -> None:
    assert len(SITE_ALL_EVENTS) == 8
    assert len({event.id for event in SITE_ALL_EVENTS}) == 8

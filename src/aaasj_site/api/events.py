"""Events CMS routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from aaasj_site.api.auth import require_user
from aaasj_site.api.security import sanitize_input
from aaasj_site.domain.events import event_to_dict

if TYPE_CHECKING:
    from aaasj_site.containers import AppContainer

_FREE_TEXT_FIELDS = ("title", "time", "location", "description", "category")

router = APIRouter(prefix="/api/events", tags=["events"])


def _clean(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        key: sanitize_input(value)
        if key in _FREE_TEXT_FIELDS and isinstance(value, str)
        else value
        for key, value in payload.items()
    }


@router.get("")
async def list_events(request: Request) -> list[dict[str, object]]:
    """Return all events, upcoming first."""
    container: AppContainer = request.app.state.container
    return [event_to_dict(event) for event in container.event_service.list_events()]


@router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_user)]
)
async def create_event(
    request: Request, payload: dict[str, Any] = Body(...)
) -> dict[str, object]:
    """Create an event."""
    container: AppContainer = request.app.state.container
    return event_to_dict(container.event_service.create_event(_clean(payload)))


@router.put("", dependencies=[Depends(require_user)])
async def update_event(
    request: Request, payload: dict[str, Any] = Body(...)
) -> dict[str, object]:
    """Merge changes into an existing event."""
    container: AppContainer = request.app.state.container
    return event_to_dict(container.event_service.update_event(_clean(payload)))


@router.delete(
    "", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_user)]
)
async def delete_event(
    request: Request,
    id: str | None = None,  # noqa: A002
) -> Response:
    """Delete an event by id."""
    container: AppContainer = request.app.state.container
    container.event_service.delete_event(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/import-from-site", dependencies=[Depends(require_user)])
async def import_from_site(request: Request) -> dict[str, int]:
    """Merge the built-in site events into the store."""
    container: AppContainer = request.app.state.container
    summary = container.event_service.import_site_events()
    return {"added": summary.added, "total": summary.total}

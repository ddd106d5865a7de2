"""Service listing and creating albums through the Photos Library API."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from aaasj_site.adapters.photos_library_client import PhotosLibraryClient
from aaasj_site.errors import InvalidRequestError, PhotosLibraryError

MAX_PAGES = 50
PAGE_SIZE = 50

_logger = logging.getLogger(__name__)

PageFetcher = Callable[[str | None], Awaitable[dict[str, object]]]


@dataclass
class AlbumListing:
    """Merged album list plus diagnostics collected along the way."""

    albums: list[dict[str, object]]
    debug: dict[str, object] = field(default_factory=dict)


@dataclass
class GooglePhotosService:
    """Application service over the user's Google Photos library."""

    client: PhotosLibraryClient

    async def list_albums(self, access_token: str, debug: bool = False) -> AlbumListing:
        """Return owned and shared albums merged by id and sorted by title.

        Without ``debug`` the first upstream error is raised. With it, errors
        are recorded in the diagnostics and the partial listing is returned.
        """
        diagnostics: dict[str, object] = {"haveAccessToken": True}
        if debug:
            try:
                status, info = await self.client.token_info(access_token)
            except PhotosLibraryError as exc:
                diagnostics["tokenInfoError"] = exc.message
            else:
                diagnostics["tokenInfoStatus"] = status
                diagnostics["tokenInfo"] = info

        owned = await self._collect(
            lambda token: self.client.list_albums(access_token, token, PAGE_SIZE),
            key="albums",
            error_prefix="albums",
            diagnostics=diagnostics,
            debug=debug,
        )
        diagnostics["ownedCount"] = len(owned)
        shared = await self._collect(
            lambda token: self.client.list_shared_albums(
                access_token, token, PAGE_SIZE
            ),
            key="sharedAlbums",
            error_prefix="shared",
            diagnostics=diagnostics,
            debug=debug,
        )
        diagnostics["sharedCount"] = len(shared)

        merged: dict[str, dict[str, object]] = {}
        for album in [*owned, *shared]:
            merged[str(album.get("id"))] = album
        albums = sorted(merged.values(), key=_title_sort_key)
        if debug:
            _logger.info("Photos albums debug", extra={"data": diagnostics})
        return AlbumListing(albums=albums, debug=diagnostics)

    async def create_album(self, access_token: str, title: str | None) -> str:
        """Create an album and return the upstream response body."""
        if not title:
            raise InvalidRequestError("Missing title")
        return await self.client.create_album(access_token, title)

    @staticmethod
    async def _collect(
        fetch_page: PageFetcher,
        *,
        key: str,
        error_prefix: str,
        diagnostics: dict[str, object],
        debug: bool,
    ) -> list[dict[str, object]]:
        items: list[dict[str, object]] = []
        page_token: str | None = None
        for _ in range(MAX_PAGES):
            try:
                page = await fetch_page(page_token)
            except PhotosLibraryError as exc:
                diagnostics[f"{error_prefix}ErrorStatus"] = exc.status_code
                diagnostics[f"{error_prefix}Error"] = exc.body
                if not debug:
                    raise
                break
            items.extend(page.get(key) or [])
            page_token = page.get("nextPageToken")
            if not page_token:
                break
        return items


def _title_sort_key(album: dict[str, object]) -> str:
    return str(album.get("title") or "").casefold()

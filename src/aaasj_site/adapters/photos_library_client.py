"""Google Photos Library API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from aaasj_site.errors import PhotosLibraryError

PHOTOS_LIBRARY_URL = "https://photoslibrary.googleapis.com/v1"
TOKEN_INFO_URL = "https://oauth2.googleapis.com/tokeninfo"
UPSTREAM_UNAVAILABLE = 502


class PhotosLibraryClient(Protocol):
    """Interface for Photos Library API interactions."""

    async def list_albums(
        self, access_token: str, page_token: str | None = None, page_size: int = 50
    ) -> dict[str, object]:
        """Return one page of albums owned by the user."""

    async def list_shared_albums(
        self, access_token: str, page_token: str | None = None, page_size: int = 50
    ) -> dict[str, object]:
        """Return one page of albums shared with the user."""

    async def create_album(self, access_token: str, title: str) -> str:
        """Create an album and return the raw response body."""

    async def token_info(self, access_token: str) -> tuple[int, object]:
        """Return the tokeninfo status code and payload."""


@dataclass
class HttpxPhotosLibraryClient(PhotosLibraryClient):
    """Photos Library client implemented with httpx."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxPhotosLibraryClient":
        """Create a client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient())

    async def list_albums(
        self, access_token: str, page_token: str | None = None, page_size: int = 50
    ) -> dict[str, object]:
        """Return one page of owned albums."""
        return await self._get_page("albums", access_token, page_token, page_size)

    async def list_shared_albums(
        self, access_token: str, page_token: str | None = None, page_size: int = 50
    ) -> dict[str, object]:
        """Return one page of shared albums."""
        return await self._get_page("sharedAlbums", access_token, page_token, page_size)

    async def create_album(self, access_token: str, title: str) -> str:
        """Create an album via POST /albums."""
        try:
            response = await self.http_client.post(
                f"{PHOTOS_LIBRARY_URL}/albums",
                headers={"Authorization": f"Bearer {access_token}"},
                json={"album": {"title": title}},
                timeout=15,
            )
        except httpx.HTTPError as exc:
            raise _transport_error(exc) from exc
        if not response.is_success:
            raise PhotosLibraryError(
                response.status_code, response.text or "Failed to create album"
            )
        return response.text

    async def token_info(self, access_token: str) -> tuple[int, object]:
        """Look up scopes and audience for an access token."""
        try:
            response = await self.http_client.get(
                TOKEN_INFO_URL, params={"access_token": access_token}, timeout=10
            )
        except httpx.HTTPError as exc:
            raise _transport_error(exc) from exc
        if response.is_success:
            return response.status_code, response.json()
        return response.status_code, response.text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get_page(
        self,
        resource: str,
        access_token: str,
        page_token: str | None,
        page_size: int,
    ) -> dict[str, object]:
        params: dict[str, object] = {"pageSize": page_size}
        if page_token:
            params["pageToken"] = page_token
        try:
            response = await self.http_client.get(
                f"{PHOTOS_LIBRARY_URL}/{resource}",
                headers={"Authorization": f"Bearer {access_token}"},
                params=params,
                timeout=15,
            )
        except httpx.HTTPError as exc:
            raise _transport_error(exc) from exc
        if not response.is_success:
            raise PhotosLibraryError(response.status_code, response.text)
        return response.json()


def _transport_error(exc: httpx.HTTPError) -> PhotosLibraryError:
    return PhotosLibraryError(
        UPSTREAM_UNAVAILABLE, f"Photos Library request failed: {exc}"
    )

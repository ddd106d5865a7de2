"""HTTP client that downloads shared Google Photos album pages."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from aaasj_site.domain.albums import AlbumPage
from aaasj_site.errors import AlbumFetchError

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
SHORT_LINK_HOST = "photos.app.goo.gl"
PHOTOS_HOST = "photos.google.com"

_logger = logging.getLogger(__name__)


class SharedAlbumFetcher(Protocol):
    """Interface for fetching the HTML behind a shared album URL."""

    async def fetch_album_page(self, share_url: str) -> AlbumPage:
        """Return the album page HTML, preferring the embed view."""


@dataclass
class HttpxSharedAlbumFetcher(SharedAlbumFetcher):
    """Shared album fetcher implemented with httpx."""

    http_client: httpx.AsyncClient
    timeout: float = 20

    @classmethod
    def create(cls) -> "HttpxSharedAlbumFetcher":
        """Create a fetcher with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(
                headers={"User-Agent": BROWSER_USER_AGENT}, follow_redirects=True
            )
        )

    async def fetch_album_page(self, share_url: str) -> AlbumPage:
        """Resolve short links, then fetch the embed page or the album page."""
        actual_url = share_url
        embed_url = ""
        if SHORT_LINK_HOST in share_url:
            try:
                redirect = await self.http_client.get(share_url, timeout=self.timeout)
            except httpx.HTTPError as exc:
                raise AlbumFetchError(
                    f"Failed to resolve share URL: {exc}", actual_url=share_url
                ) from exc
            actual_url = str(redirect.url)
            embed_url = share_url.replace("/share/", "/embed/")
            _logger.info("Short link %s resolved to %s", share_url, actual_url)

        if embed_url:
            try:
                response = await self.http_client.get(embed_url, timeout=self.timeout)
            except httpx.HTTPError:
                _logger.info("Embed URL failed, trying album URL: %s", embed_url)
            else:
                if response.is_success:
                    return AlbumPage(
                        share_url=share_url,
                        actual_url=actual_url,
                        embed_url=embed_url,
                        source="embed",
                        html=response.text,
                    )

        try:
            response = await self.http_client.get(actual_url, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise AlbumFetchError(
                f"Failed to fetch any URL: {exc}", actual_url=actual_url
            ) from exc
        if not response.is_success:
            raise AlbumFetchError(
                f"Failed to fetch album URL: {response.status_code} "
                f"{response.reason_phrase}",
                actual_url=actual_url,
                status=response.status_code,
            )
        return AlbumPage(
            share_url=share_url,
            actual_url=actual_url,
            embed_url=embed_url,
            source="actual",
            html=response.text,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

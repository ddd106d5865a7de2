"""Services for shared photo albums."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import uuid4

from aaasj_site.adapters.shared_album_client import SharedAlbumFetcher
from aaasj_site.domain.albums import Photo, SharedAlbum
from aaasj_site.errors import AlbumFetchError, InvalidRequestError, NotFoundError
from aaasj_site.services.photo_extraction import debug_patterns, extract_photos

_logger = logging.getLogger(__name__)


class AlbumRepository(Protocol):
    """Persistence interface for shared albums."""

    def list_albums(self) -> list[SharedAlbum]:
        """Return every stored album in storage order."""

    def add_album(self, album: SharedAlbum) -> None:
        """Append an album to the store."""

    def replace_album(self, album: SharedAlbum) -> None:
        """Replace the stored album that has the same id."""

    def delete_album(self, album_id: str) -> bool:
        """Delete an album by id and report whether it existed."""


@dataclass
class AlbumService:
    """Application service for the photo albums CMS."""

    repository: AlbumRepository
    fetcher: SharedAlbumFetcher

    def list_albums(self, include_private: bool) -> list[SharedAlbum]:
        """Return albums, limited to public ones for anonymous visitors."""
        albums = self.repository.list_albums()
        if include_private:
            return albums
        return [album for album in albums if album.is_public]

    async def create_album(  # noqa: PLR0913
        self,
        title: str | None,
        share_url: str | None,
        description: str | None = None,
        is_public: bool = False,
        fetch_photos: bool = False,
    ) -> SharedAlbum:
        """Register an album and optionally scrape its photos right away."""
        title = (title or "").strip()
        share_url = (share_url or "").strip()
        if not title or not share_url:
            raise InvalidRequestError("Missing required fields")
        album = SharedAlbum(
            id=str(uuid4()),
            title=title,
            share_url=share_url,
            description=(description or "").strip() or None,
            is_public=bool(is_public),
        )
        if fetch_photos:
            album = replace(album, photos=tuple(await self.fetch_photos(share_url)))
        self.repository.add_album(album)
        _logger.info("Created album %s with %s photos", album.id, len(album.photos))
        return album

    async def update_album(
        self, album_id: str | None, action: str | None, photo_id: str | None = None
    ) -> SharedAlbum:
        """Apply an admin action to an existing album."""
        if not album_id:
            raise InvalidRequestError("Missing albumId")
        self._get(album_id)
        if action == "fetchPhotos":
            return await self.refresh_photos(album_id)
        if action == "removePhoto" and photo_id:
            return self.remove_photo(album_id, photo_id)
        raise InvalidRequestError("Invalid action")

    async def refresh_photos(self, album_id: str) -> SharedAlbum:
        """Replace an album's photos with a fresh scrape of its share URL."""
        album = self._get(album_id)
        photos = await self.fetch_photos(album.share_url)
        updated = replace(album, photos=tuple(photos))
        self.repository.replace_album(updated)
        _logger.info("Fetched %s photos for album: %s", len(photos), album.title)
        return updated

    def remove_photo(self, album_id: str, photo_id: str) -> SharedAlbum:
        """Drop one photo from an album."""
        album = self._get(album_id)
        remaining = tuple(photo for photo in album.photos if photo.id != photo_id)
        if len(remaining) == len(album.photos):
            return album
        updated = replace(album, photos=remaining)
        self.repository.replace_album(updated)
        return updated

    def delete_album(self, album_id: str | None) -> None:
        """Delete an album by id."""
        if not album_id:
            raise InvalidRequestError("Missing album ID")
        if not self.repository.delete_album(album_id):
            raise NotFoundError("Album not found")

    async def fetch_photos(self, share_url: str) -> list[Photo]:
        """Scrape an album page; fetch failures yield no photos."""
        try:
            page = await self.fetcher.fetch_album_page(share_url)
        except AlbumFetchError:
            _logger.exception("Failed to fetch photos from album %s", share_url)
            return []
        return extract_photos(page.html, album_id=share_url).photos

    async def debug_extraction(self, share_url: str | None) -> dict[str, object]:
        """Report how the extraction patterns match a live album page."""
        if not share_url:
            raise InvalidRequestError("Missing shareUrl")
        page = await self.fetcher.fetch_album_page(share_url)
        return {
            "shareUrl": page.share_url,
            "actualUrl": page.actual_url,
            "embedUrl": page.embed_url,
            "source": page.source,
            **debug_patterns(page.html),
        }

    def _get(self, album_id: str) -> SharedAlbum:
        for album in self.repository.list_albums():
            if album.id == album_id:
                return album
        raise NotFoundError("Album not found")

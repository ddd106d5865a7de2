"""Supabase-backed shared album repository."""

from dataclasses import dataclass

from supabase import Client

from aaasj_site.domain.albums import SharedAlbum, photo_from_dict, photo_to_dict
from aaasj_site.services.albums import AlbumRepository

_TABLE = "shared_albums"


@dataclass
class SupabaseAlbumRepository(AlbumRepository):
    """Supabase implementation storing album photos as a JSON column."""

    client: Client

    def list_albums(self) -> list[SharedAlbum]:
        """Return every stored album."""
        response = self.client.table(_TABLE).select("*").execute()
        return [_parse_album(row) for row in response.data or []]

    def add_album(self, album: SharedAlbum) -> None:
        """Insert an album row."""
        response = self.client.table(_TABLE).insert(_serialize_album(album)).execute()
        if not response.data:
            raise RuntimeError("Failed to create album")

    def replace_album(self, album: SharedAlbum) -> None:
        """Overwrite the stored row with the same id."""
        payload = _serialize_album(album)
        payload.pop("id")
        self.client.table(_TABLE).update(payload).eq("id", album.id).execute()

    def delete_album(self, album_id: str) -> bool:
        """Delete an album row by id."""
        response = self.client.table(_TABLE).delete().eq("id", album_id).execute()
        return bool(response.data)


def _serialize_album(album: SharedAlbum) -> dict[str, object]:
    return {
        "id": album.id,
        "title": album.title,
        "share_url": album.share_url,
        "description": album.description,
        "is_public": album.is_public,
        "photos": [photo_to_dict(photo) for photo in album.photos],
    }


def _parse_album(row: dict[str, object]) -> SharedAlbum:
    photos = row.get("photos") or []
    return SharedAlbum(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        share_url=str(row.get("share_url") or ""),
        is_public=bool(row.get("is_public")),
        description=row.get("description"),
        photos=tuple(photo_from_dict(photo) for photo in photos),
    )

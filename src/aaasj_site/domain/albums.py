"""Domain models for shared Google Photos albums."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Photo:
    """A single photo scraped from a shared album."""

    id: str
    url: str
    album_id: str
    thumbnail_url: str | None = None
    width: int | None = None
    height: int | None = None
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SharedAlbum:
    """A shared album registered in the CMS."""

    id: str
    title: str
    share_url: str
    is_public: bool
    description: str | None = None
    photos: tuple[Photo, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExtractionResult:
    """Photos found on an album page and the album size it advertised."""

    photos: list[Photo]
    total_count: int


@dataclass(frozen=True)
class AlbumPage:
    """HTML fetched for a shared album along with how it was reached."""

    share_url: str
    actual_url: str
    embed_url: str
    source: str
    html: str


def photo_from_dict(row: dict[str, object]) -> Photo:
    """Build a photo from its stored JSON representation."""
    return Photo(
        id=str(row["id"]),
        url=str(row["url"]),
        album_id=str(row.get("albumId", "")),
        thumbnail_url=row.get("thumbnailUrl"),
        width=row.get("width"),
        height=row.get("height"),
        title=row.get("title"),
        description=row.get("description"),
    )


def photo_to_dict(photo: Photo) -> dict[str, object]:
    """Serialize a photo, omitting unset optional fields."""
    row: dict[str, object] = {"id": photo.id}
    if photo.title is not None:
        row["title"] = photo.title
    if photo.description is not None:
        row["description"] = photo.description
    row["url"] = photo.url
    if photo.thumbnail_url is not None:
        row["thumbnailUrl"] = photo.thumbnail_url
    if photo.width is not None:
        row["width"] = photo.width
    if photo.height is not None:
        row["height"] = photo.height
    row["albumId"] = photo.album_id
    return row


def album_from_dict(row: dict[str, object]) -> SharedAlbum:
    """Build an album from its stored JSON representation."""
    photos = row.get("photos") or []
    return SharedAlbum(
        id=str(row["id"]),
        title=str(row.get("title", "")),
        share_url=str(row.get("shareUrl", "")),
        is_public=bool(row.get("isPublic", False)),
        description=row.get("description"),
        photos=tuple(photo_from_dict(photo) for photo in photos),
    )


def album_to_dict(album: SharedAlbum) -> dict[str, object]:
    """Serialize an album together with its photos."""
    row: dict[str, object] = {
        "id": album.id,
        "title": album.title,
        "shareUrl": album.share_url,
    }
    if album.description is not None:
        row["description"] = album.description
    row["isPublic"] = album.is_public
    row["photos"] = [photo_to_dict(photo) for photo in album.photos]
    return row

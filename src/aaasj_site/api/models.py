"""Pydantic models for JSON request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AlbumCreateRequest(_CamelModel):
    """Body of ``POST /api/photos/albums``."""

    title: str | None = None
    share_url: str | None = Field(default=None, alias="shareUrl")
    description: str | None = None
    is_public: bool = Field(default=False, alias="isPublic")
    fetch_photos: bool = Field(default=False, alias="fetchPhotos")


class AlbumUpdateRequest(_CamelModel):
    """Body of ``PUT /api/photos/albums``."""

    album_id: str | None = Field(default=None, alias="albumId")
    action: str | None = None
    photo_id: str | None = Field(default=None, alias="photoId")


class AlbumDebugRequest(_CamelModel):
    """Body of ``POST /api/photos/debug``."""

    share_url: str | None = Field(default=None, alias="shareUrl")


class PhotosAlbumCreateRequest(BaseModel):
    """Body of ``POST /api/google/photos/albums``."""

    title: str | None = None


class ConsoleLogEntry(BaseModel):
    """A log line forwarded from the browser."""

    level: str = "info"
    message: str = "client-log"
    data: object | None = None

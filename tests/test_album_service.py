"""Tests for the album service."""

import asyncio

import pytest

from aaasj_site.domain.albums import Photo
from aaasj_site.errors import AlbumFetchError, InvalidRequestError, NotFoundError
from aaasj_site.services.albums import AlbumService
from tests.conftest import FakeAlbumFetcher, InMemoryAlbumRepository, make_album


def _service(
    repository: InMemoryAlbumRepository | None = None,
    fetcher: FakeAlbumFetcher | None = None,
) -> AlbumService:
    return AlbumService(
        repository if repository is not None else InMemoryAlbumRepository(),
        fetcher if fetcher is not None else FakeAlbumFetcher(),
    )


def test_list_albums_hides_private_albums_from_visitors() -> None:
    repository = InMemoryAlbumRepository(
        albums=[make_album("pub"), make_album("priv", is_public=False)]
    )
    service = _service(repository)

    assert [album.id for album in service.list_albums(include_private=False)] == ["pub"]
    assert len(service.list_albums(include_private=True)) == 2


def test_create_album_trims_and_fetches_photos() -> None:
    repository = InMemoryAlbumRepository()
    service = _service(repository)

    album = asyncio.run(
        service.create_album(
            title="  Gala  ",
            share_url=" https://photos.app.goo.gl/gala ",
            description="   ",
            is_public=True,
            fetch_photos=True,
        )
    )

    assert album.title == "Gala"
    assert album.share_url == "https://photos.app.goo.gl/gala"
    assert album.description is None
    assert len(album.photos) == 2
    assert repository.albums == [album]


def test_create_album_without_fetch_leaves_photos_empty() -> None:
    fetcher = FakeAlbumFetcher()
    service = _service(fetcher=fetcher)

    album = asyncio.run(service.create_album("Gala", "https://photos.app.goo.gl/x"))

    assert album.photos == ()
    assert album.is_public is False
    assert fetcher.requested == []


def test_create_album_requires_title_and_url() -> None:
    service = _service()

    with pytest.raises(InvalidRequestError, match="Missing required fields"):
        asyncio.run(service.create_album("  ", "https://photos.app.goo.gl/x"))


def test_fetch_failure_yields_no_photos() -> None:
    service = _service(fetcher=FakeAlbumFetcher(fail=True))

    assert asyncio.run(service.fetch_photos("https://photos.app.goo.gl/x")) == []


def test_refresh_photos_replaces_existing_photos() -> None:
    stale = Photo(id="old", url="https://example.test/old", album_id="a1")
    repository = InMemoryAlbumRepository(albums=[make_album("a1", photos=(stale,))])
    service = _service(repository)

    refreshed = asyncio.run(service.refresh_photos("a1"))

    assert [photo.id for photo in refreshed.photos] != ["old"]
    assert len(refreshed.photos) == 2
    assert repository.albums[0] == refreshed


def test_remove_photo() -> None:
    photos = (
        Photo(id="keep", url="https://example.test/keep", album_id="a1"),
        Photo(id="drop", url="https://example.test/drop", album_id="a1"),
    )
    repository = InMemoryAlbumRepository(albums=[make_album("a1", photos=photos)])
    service = _service(repository)

    updated = service.remove_photo("a1", "drop")

    assert [photo.id for photo in updated.photos] == ["keep"]
    assert repository.albums[0].photos == updated.photos


def test_unknown_album_raises_not_found() -> None:
    service = _service()

    with pytest.raises(NotFoundError):
        service.remove_photo("missing", "p1")
    with pytest.raises(NotFoundError):
        asyncio.run(service.refresh_photos("missing"))
    with pytest.raises(NotFoundError):
        service.delete_album("missing")


def test_update_album_checks_album_before_action() -> None:
    service = _service(InMemoryAlbumRepository(albums=[make_album("a1")]))

    with pytest.raises(InvalidRequestError, match="Missing albumId"):
        asyncio.run(service.update_album(None, "fetchPhotos"))
    with pytest.raises(NotFoundError):
        asyncio.run(service.update_album("missing", "bogus"))
    with pytest.raises(InvalidRequestError, match="Invalid action"):
        asyncio.run(service.update_album("a1", "bogus"))
    with pytest.raises(InvalidRequestError, match="Invalid action"):
        asyncio.run(service.update_album("a1", "removePhoto"))


def test_delete_album_requires_id() -> None:
    repository = InMemoryAlbumRepository(albums=[make_album("a1")])
    service = _service(repository)

    with pytest.raises(InvalidRequestError, match="Missing album ID"):
        service.delete_album(None)
    service.delete_album("a1")

    assert repository.albums == []


def test_debug_extraction_reports_page_details() -> None:
    service = _service()

    report = asyncio.run(service.debug_extraction("https://photos.google.com/share/x"))

    assert report["shareUrl"] == "https://photos.google.com/share/x"
    assert report["source"] == "actual"
    assert report["jsonMatches"] == 1


def test_debug_extraction_propagates_fetch_errors() -> None:
    service = _service(fetcher=FakeAlbumFetcher(fail=True))

    with pytest.raises(AlbumFetchError):
        asyncio.run(service.debug_extraction("https://photos.google.com/share/x"))
    with pytest.raises(InvalidRequestError):
        asyncio.run(service.debug_extraction(None))

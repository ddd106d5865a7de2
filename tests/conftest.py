"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

import pytest

from aaasj_site.adapters.google_oauth_client import GoogleOAuthClient
from aaasj_site.adapters.photos_library_client import PhotosLibraryClient
from aaasj_site.adapters.shared_album_client import SharedAlbumFetcher
from aaasj_site.adapters.smtp_mailer import Mailer
from aaasj_site.api.auth import SESSION_COOKIE
from aaasj_site.config import Settings
from aaasj_site.containers import AppContainer
from aaasj_site.domain.albums import AlbumPage, SharedAlbum
from aaasj_site.domain.auth import GoogleProfile, GoogleTokens
from aaasj_site.domain.events import EventItem
from aaasj_site.domain.scholarship import OutgoingEmail
from aaasj_site.errors import AlbumFetchError, PhotosLibraryError
from aaasj_site.services.albums import AlbumRepository, AlbumService
from aaasj_site.services.auth import AuthService, SessionCodec
from aaasj_site.services.events import EventRepository, EventService
from aaasj_site.services.google_photos import GooglePhotosService
from aaasj_site.services.rate_limit import FixedWindowRateLimiter
from aaasj_site.services.scholarship import ScholarshipService
from aaasj_site.site_events import SITE_ALL_EVENTS

FIXED_NOW = datetime(2025, 9, 1, 12, 0, tzinfo=UTC)

ALBUM_HTML = """
<html><body>
<img src="https://lh3.googleusercontent.com/pw/AAA111=w400-h300-no" />
<img src="https://lh3.googleusercontent.com/a/avatar=s32-p-no" />
<script>window.data = {"album": {"mediaItemsCount": 2}, "photos": [
  {"url": "https://lh3.googleusercontent.com/pw/BBB222=w2048-h1536-c",
   "width": 2048, "height": 1536}
]};</script>
</body></html>
"""


@dataclass
class InMemoryEventRepository(EventRepository):
    """In-memory event repository for tests."""

    events: list[EventItem] = field(default_factory=list)

    def list_events(self) -> list[EventItem]:
        return list(self.events)

    def add_events(self, events: list[EventItem]) -> None:
        self.events.extend(events)

    def replace_event(self, event: EventItem) -> None:
        self.events = [event if item.id == event.id else item for item in self.events]

    def delete_event(self, event_id: str) -> bool:
        before = len(self.events)
        self.events = [item for item in self.events if item.id != event_id]
        return len(self.events) != before


@dataclass
class InMemoryAlbumRepository(AlbumRepository):
    """In-memory album repository for tests."""

    albums: list[SharedAlbum] = field(default_factory=list)

    def list_albums(self) -> list[SharedAlbum]:
        return list(self.albums)

    def add_album(self, album: SharedAlbum) -> None:
        self.albums.append(album)

    def replace_album(self, album: SharedAlbum) -> None:
        self.albums = [album if item.id == album.id else item for item in self.albums]

    def delete_album(self, album_id: str) -> bool:
        before = len(self.albums)
        self.albums = [item for item in self.albums if item.id != album_id]
        return len(self.albums) != before


@dataclass
class FakeAlbumFetcher(SharedAlbumFetcher):
    """Fake fetcher returning canned HTML."""

    html: str = ALBUM_HTML
    fail: bool = False
    requested: list[str] = field(default_factory=list)

    async def fetch_album_page(self, share_url: str) -> AlbumPage:
        self.requested.append(share_url)
        if self.fail:
            raise AlbumFetchError(
                "Failed to fetch album URL: 404 Not Found",
                actual_url=share_url,
                status=404,
            )
        return AlbumPage(
            share_url=share_url,
            actual_url=share_url,
            embed_url="",
            source="actual",
            html=self.html,
        )


@dataclass
class FakePhotosLibraryClient(PhotosLibraryClient):
    """Fake Photos Library client serving fixed pages."""

    owned_pages: list[dict[str, object]] = field(
        default_factory=lambda: [
            {"albums": [{"id": "a1", "title": "Zoo"}], "nextPageToken": "p2"},
            {"albums": [{"id": "a2", "title": "Beach"}]},
        ]
    )
    shared_pages: list[dict[str, object]] = field(
        default_factory=lambda: [
            {"sharedAlbums": [{"id": "a1", "title": "Zoo (shared)"}]},
        ]
    )
    error: PhotosLibraryError | None = None
    created_titles: list[str] = field(default_factory=list)

    async def list_albums(
        self, access_token: str, page_token: str | None, page_size: int
    ) -> dict[str, object]:
        if self.error is not None:
            raise self.error
        return self.owned_pages[1 if page_token == "p2" else 0]

    async def list_shared_albums(
        self, access_token: str, page_token: str | None, page_size: int
    ) -> dict[str, object]:
        return self.shared_pages[0]

    async def create_album(self, access_token: str, title: str) -> str:
        self.created_titles.append(title)
        return f'{{"id": "new", "title": "{title}"}}'

    async def token_info(self, access_token: str) -> tuple[int, object]:
        return 200, {"scope": "photoslibrary.readonly"}


@dataclass
class FakeOAuthClient(GoogleOAuthClient):
    """Fake Google OAuth client returning a fixed profile."""

    email: str = "staff@aaa-sj.org"

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        return f"https://accounts.example.test/auth?state={state}&redirect={redirect_uri}"

    async def exchange_code(self, code: str, redirect_uri: str) -> GoogleTokens:
        return GoogleTokens(
            access_token=f"access-{code}", refresh_token="refresh", expires_in=3600
        )

    async def fetch_profile(self, access_token: str) -> GoogleProfile:
        return GoogleProfile(email=self.email, name="Staff Member", email_verified=True)


@dataclass
class FakeMailer(Mailer):
    """Fake mailer that records messages."""

    sent: list[OutgoingEmail] = field(default_factory=list)

    async def send(self, message: OutgoingEmail) -> str:
        self.sent.append(message)
        return f"<message-{len(self.sent)}@test>"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        session_secret="test-secret",
        google_client_id="client-id",
        google_client_secret="client-secret",
        data_dir=tmp_path,
        smtp_host="smtp.example.test",
        smtp_port=587,
        smtp_user="mailer@aaa-sj.org",
        smtp_pass="password",
        scholarship_email_from="mailer@aaa-sj.org",
    )


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def album_fetcher() -> FakeAlbumFetcher:
    return FakeAlbumFetcher()


@pytest.fixture
def oauth_client() -> FakeOAuthClient:
    return FakeOAuthClient()


@pytest.fixture
def codec(settings: Settings) -> SessionCodec:
    return SessionCodec(
        secret=settings.session_secret,
        max_age_seconds=settings.session_max_age_seconds,
    )


@pytest.fixture
def container(
    settings: Settings,
    mailer: FakeMailer,
    album_fetcher: FakeAlbumFetcher,
    oauth_client: FakeOAuthClient,
    codec: SessionCodec,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        event_service=EventService(
            InMemoryEventRepository(), site_events=SITE_ALL_EVENTS
        ),
        album_service=AlbumService(InMemoryAlbumRepository(), album_fetcher),
        google_photos_service=GooglePhotosService(FakePhotosLibraryClient()),
        scholarship_service=ScholarshipService(
            mailer=mailer,
            email_to=settings.scholarship_email_to,
            email_from=settings.scholarship_email_from,
            clock=lambda: FIXED_NOW,
        ),
        auth_service=AuthService(
            oauth_client=oauth_client,
            codec=codec,
            allowed_domain=settings.allowed_email_domain,
        ),
        rate_limiter=FixedWindowRateLimiter(
            window_seconds=settings.rate_limit_window_seconds,
            max_requests=settings.rate_limit_max_requests,
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def staff_cookies(codec: SessionCodec) -> dict[str, str]:
    token = codec.encode(
        {
            "sub": "staff@aaa-sj.org",
            "email": "staff@aaa-sj.org",
            "name": "Staff Member",
            "access_token": "google-access-token",
        }
    )
    return {SESSION_COOKIE: token}


def make_event(
    event_id: str, date: str, status: str = "upcoming", **kwargs
) -> EventItem:
    """Build an event with sensible defaults."""
    title = kwargs.pop("title", f"Event {event_id}")
    return EventItem(id=event_id, title=title, date=date, status=status, **kwargs)


def make_album(album_id: str, is_public: bool = True, **kwargs) -> SharedAlbum:
    """Build an album with sensible defaults."""
    album = SharedAlbum(
        id=album_id,
        title=f"Album {album_id}",
        share_url=f"https://photos.app.goo.gl/{album_id}",
        is_public=is_public,
    )
    return replace(album, **kwargs)

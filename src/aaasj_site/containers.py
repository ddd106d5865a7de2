"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from aaasj_site.adapters.google_oauth_client import HttpxGoogleOAuthClient
from aaasj_site.adapters.json_file_store import JsonAlbumRepository, JsonEventRepository
from aaasj_site.adapters.photos_library_client import HttpxPhotosLibraryClient
from aaasj_site.adapters.shared_album_client import HttpxSharedAlbumFetcher
from aaasj_site.adapters.smtp_mailer import Mailer, SmtpMailer
from aaasj_site.adapters.supabase_album_repository import SupabaseAlbumRepository
from aaasj_site.adapters.supabase_event_repository import SupabaseEventRepository
from aaasj_site.config import Settings, missing_smtp_settings
from aaasj_site.services.albums import AlbumRepository, AlbumService
from aaasj_site.services.auth import AuthService, SessionCodec
from aaasj_site.services.events import EventRepository, EventService
from aaasj_site.services.google_photos import GooglePhotosService
from aaasj_site.services.rate_limit import FixedWindowRateLimiter
from aaasj_site.services.scholarship import ScholarshipService
from aaasj_site.site_events import SITE_ALL_EVENTS


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    event_service: EventService
    album_service: AlbumService
    google_photos_service: GooglePhotosService
    scholarship_service: ScholarshipService
    auth_service: AuthService
    rate_limiter: FixedWindowRateLimiter
    close_resources: Callable[[], Awaitable[None]]


def build_repositories(settings: Settings) -> tuple[EventRepository, AlbumRepository]:
    """Create the event and album repositories for the configured backend."""
    if settings.storage_backend == "supabase":
        supabase_client = create_client(
            settings.supabase_url or "", settings.supabase_service_key or ""
        )
        return (
            SupabaseEventRepository(supabase_client),
            SupabaseAlbumRepository(supabase_client),
        )
    return (
        JsonEventRepository.in_directory(settings.data_dir),
        JsonAlbumRepository.in_directory(settings.data_dir),
    )


def build_mailer(settings: Settings) -> Mailer | None:
    """Create an SMTP mailer, or None when credentials are incomplete."""
    if not settings.smtp_configured:
        return None
    return SmtpMailer(
        host=settings.smtp_host or "",
        port=settings.smtp_port or 0,
        username=settings.smtp_user or "",
        password=settings.smtp_pass or "",
        use_ssl=settings.smtp_secure,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    event_repository, album_repository = build_repositories(resolved_settings)
    album_fetcher = HttpxSharedAlbumFetcher.create()
    photos_client = HttpxPhotosLibraryClient.create()
    oauth_client = HttpxGoogleOAuthClient.create(
        client_id=resolved_settings.google_client_id,
        client_secret=resolved_settings.google_client_secret,
        hosted_domain=resolved_settings.allowed_email_domain,
    )
    scholarship_service = ScholarshipService(
        mailer=build_mailer(resolved_settings),
        email_to=resolved_settings.scholarship_email_to,
        email_from=(
            resolved_settings.scholarship_email_from or resolved_settings.smtp_user
        ),
        deadline=resolved_settings.scholarship_deadline,
        missing_settings=missing_smtp_settings(resolved_settings),
    )
    auth_service = AuthService(
        oauth_client=oauth_client,
        codec=SessionCodec(
            secret=resolved_settings.session_secret,
            max_age_seconds=resolved_settings.session_max_age_seconds,
        ),
        allowed_domain=resolved_settings.allowed_email_domain,
    )

    async def close_resources() -> None:
        await album_fetcher.close()
        await photos_client.close()
        await oauth_client.close()

    return AppContainer(
        settings=resolved_settings,
        event_service=EventService(event_repository, site_events=SITE_ALL_EVENTS),
        album_service=AlbumService(album_repository, album_fetcher),
        google_photos_service=GooglePhotosService(photos_client),
        scholarship_service=scholarship_service,
        auth_service=auth_service,
        rate_limiter=FixedWindowRateLimiter(
            window_seconds=resolved_settings.rate_limit_window_seconds,
            max_requests=resolved_settings.rate_limit_max_requests,
        ),
        close_resources=close_resources,
    )

"""Exceptions raised by services and mapped to HTTP responses by the API."""


class SiteError(Exception):
    """Base error carrying the HTTP status the API should answer with."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(SiteError):
    """Raised when a request payload fails validation."""

    status_code = 400


class NotFoundError(SiteError):
    """Raised when a record with the requested id does not exist."""

    status_code = 404


class AlbumFetchError(SiteError):
    """Raised when no page could be fetched for a shared album URL."""

    status_code = 502

    def __init__(
        self,
        message: str,
        actual_url: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.actual_url = actual_url
        self.status = status


class PhotosLibraryError(SiteError):
    """Raised when the Google Photos Library API answers with an error."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(body or f"Photos Library request failed ({status})")
        self.status_code = status
        self.body = body


class OAuthError(SiteError):
    """Raised when the Google OAuth exchange fails."""

    status_code = 401


class MailDeliveryError(SiteError):
    """Raised when the SMTP server rejects or cannot deliver a message."""


class AccessDeniedError(SiteError):
    """Raised when a signed-in account is outside the staff domain."""

    status_code = 403

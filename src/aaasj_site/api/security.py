"""HTTP security helpers: headers, CSP, client IPs and input cleanup."""

from fastapi import Request

MAX_INPUT_LENGTH = 1000

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
CORS_ALLOW_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
CORS_ALLOW_HEADERS = ("Content-Type", "Authorization")

CSP_DIRECTIVES: dict[str, tuple[str, ...]] = {
    "default-src": ("'self'",),
    "script-src": ("'self'", "'unsafe-eval'", "'unsafe-inline'"),
    "style-src": ("'self'", "'unsafe-inline'"),
    "img-src": ("'self'", "data:", "https:"),
    "font-src": ("'self'", "data:"),
    "connect-src": (
        "'self'",
        "https://www.googleapis.com",
        "https://lh3.googleusercontent.com",
    ),
    "frame-src": ("'none'",),
    "object-src": ("'none'",),
    "base-uri": ("'self'",),
    "form-action": ("'self'",),
}


def generate_csp_header(directives: dict[str, tuple[str, ...]] = CSP_DIRECTIVES) -> str:
    """Render the Content-Security-Policy header value."""
    return "; ".join(
        f"{directive} {' '.join(sources)}" for directive, sources in directives.items()
    )


def sanitize_input(value: str) -> str:
    """Trim, drop angle brackets and cap the length of free text."""
    return value.strip().replace("<", "").replace(">", "")[:MAX_INPUT_LENGTH]


def client_ip(request: Request) -> str:
    """Return the caller IP, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client is not None:
        return request.client.host
    return "unknown"

"""Extract photo URLs from shared Google Photos album pages.

Google does not document the album page markup, so extraction is a series of
best-effort passes over the HTML:

1. ``<img>`` tags pointing at the photo CDN.
2. ``<script>`` blobs holding a ``"photos"`` JSON object.
3. Loose CDN URLs with a size suffix, only while the page advertised more
   photos than the first passes found.
4. A ``mediaItemsCount`` lookup when no album size was found yet.

Every pass reduces a URL to its base (the URL without the ``=w..``/``=s..``
sizing suffix) and deduplicates on that base.
"""

import hashlib
import json
import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from aaasj_site.domain.albums import ExtractionResult, Photo

CDN_ROOT = "https://lh3.googleusercontent.com/"
THUMBNAIL_SUFFIX = "=w300-h300-c"
VIEWER_SUFFIX = "=w1200-h800-c"
AVATAR_MARKER = "=s32-p-no"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
LOOSE_SCAN_LIMIT = 100

_IMG_TAG = re.compile(
    r"""<img[^>]*src=["'](https://lh3\.googleusercontent\.com/[^"']+)["'][^>]*>"""
)
_PW_ID = re.compile(r"/pw/([^=]+)")
_SCRIPT_BODY = re.compile(r"<script[^>]*>(.*?)</script>", re.DOTALL)
_JSON_DECODER = json.JSONDecoder()
_SIZE_SUFFIX = (re.compile(r"=w\d+-h\d+-c.*$"), re.compile(r"=s\d+.*$"))

LOOSE_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"https://lh3\.googleusercontent\.com/(?:pw/)?[a-zA-Z0-9_-]+=w\d+-h\d+-c"),
    re.compile(r"https://lh3\.googleusercontent\.com/(?:pw/)?[a-zA-Z0-9_-]+=w\d+-h\d+-no"),
    re.compile(r"https://lh3\.googleusercontent\.com/(?:pw/)?[a-zA-Z0-9_-]+=s\d+-p-no"),
    re.compile(r"https://lh3\.googleusercontent\.com/(?:pw/)?[a-zA-Z0-9_-]+=s\d+-no"),
)

DEBUG_PATTERNS: tuple[re.Pattern[str], ...] = (
    *LOOSE_URL_PATTERNS,
    re.compile(r"https://lh3\.googleusercontent\.com/[a-zA-Z0-9_-]+(?![?=])"),
    re.compile(r'data-src="(https://lh3\.googleusercontent\.com/[^"]+)"'),
    re.compile(r'src="(https://lh3\.googleusercontent\.com/[^"]+)"'),
    re.compile(
        r"background-image:\s*url\(['\"]?(https://lh3\.googleusercontent\.com/[^'\"]+)['\"]?\)"
    ),
)
_ANY_CDN_URL = re.compile(r"https://lh3\.googleusercontent\.com/[a-zA-Z0-9_-]+")

_logger = logging.getLogger(__name__)


@dataclass
class _Collector:
    album_id: str
    photos: list[Photo] = field(default_factory=list)
    seen: set[str] = field(default_factory=set)

    def add(
        self, base_url: str, width: int | None = None, height: int | None = None
    ) -> bool:
        if base_url in self.seen:
            return False
        self.seen.add(base_url)
        self.photos.append(
            Photo(
                id=photo_id_for(base_url),
                url=f"{base_url}{VIEWER_SUFFIX}",
                thumbnail_url=f"{base_url}{THUMBNAIL_SUFFIX}",
                album_id=self.album_id,
                width=width or DEFAULT_WIDTH,
                height=height or DEFAULT_HEIGHT,
            )
        )
        return True


def photo_id_for(base_url: str) -> str:
    """Return a stable photo id derived from the photo's base URL."""
    digest = hashlib.sha1(base_url.encode("utf-8")).hexdigest()[:16]
    return f"photo_{digest}"


def base_url_from_pw(url: str) -> str | None:
    """Return the canonical ``/pw/<id>`` base for a CDN URL, if it has one."""
    match = _PW_ID.search(url)
    if match is None:
        return None
    return f"{CDN_ROOT}pw/{match.group(1)}"


def strip_size_suffix(url: str) -> str:
    """Drop the ``=wN-hN-c`` / ``=sN`` sizing suffix from a CDN URL."""
    for pattern in _SIZE_SUFFIX:
        url = pattern.sub("", url)
    return url


def extract_photos(html: str, album_id: str) -> ExtractionResult:
    """Run every extraction pass over the page and return the unique photos."""
    collector = _Collector(album_id=album_id)
    _collect_img_tags(html, collector)
    total_count = _collect_script_photos(html, collector)
    if len(collector.photos) < total_count and len(collector.photos) < LOOSE_SCAN_LIMIT:
        _collect_loose_urls(html, collector)
    if total_count == 0:
        total_count = _find_media_items_count(html)

    found = len(collector.photos)
    if total_count and found < total_count:
        _logger.info(
            "Extracted %s/%s photos; the rest load dynamically", found, total_count
        )
    else:
        _logger.info("Extracted %s unique photos from album", found)
    return ExtractionResult(photos=collector.photos, total_count=total_count)


def debug_patterns(html: str) -> dict[str, object]:
    """Summarize how each CDN URL pattern matches the page."""
    patterns = []
    for pattern in DEBUG_PATTERNS:
        matches = [match.group(0) for match in pattern.finditer(html)]
        patterns.append(
            {"pattern": pattern.pattern, "matches": len(matches), "urls": matches[:10]}
        )
    return {
        "htmlLength": len(html),
        "patterns": patterns,
        "jsonMatches": sum(1 for _ in _iter_script_objects(html, '"photos"')),
        "allGoogleUrls": len(_ANY_CDN_URL.findall(html)),
    }


def _collect_img_tags(html: str, collector: _Collector) -> None:
    for match in _IMG_TAG.finditer(html):
        url = match.group(1)
        if AVATAR_MARKER in url:
            continue
        base_url = base_url_from_pw(url)
        if base_url is None:
            _logger.debug("Could not extract photo id from URL: %s", url)
            continue
        collector.add(base_url)


def _collect_script_photos(html: str, collector: _Collector) -> int:
    """Add photos from embedded JSON and return the advertised album size."""
    total_count = 0
    for data in _walk_dicts(_iter_script_objects(html, '"photos"')):
        album = data.get("album")
        if isinstance(album, dict) and album.get("mediaItemsCount"):
            total_count = _as_int(album["mediaItemsCount"])
        pagination = data.get("pagination")
        if isinstance(pagination, dict) and pagination.get("totalItems"):
            total_count = _as_int(pagination["totalItems"])
        photos = data.get("photos")
        if not isinstance(photos, list):
            continue
        for photo in photos:
            if not isinstance(photo, dict):
                continue
            url = photo.get("url")
            if isinstance(url, str) and url.startswith(CDN_ROOT):
                collector.add(
                    strip_size_suffix(url),
                    width=_as_int(photo.get("width")) or None,
                    height=_as_int(photo.get("height")) or None,
                )
    return total_count


def _collect_loose_urls(html: str, collector: _Collector) -> None:
    for pattern in LOOSE_URL_PATTERNS:
        for match in pattern.finditer(html):
            url = match.group(0)
            if AVATAR_MARKER in url:
                continue
            base_url = base_url_from_pw(url)
            if base_url is not None:
                collector.add(base_url)


def _find_media_items_count(html: str) -> int:
    total_count = 0
    for data in _walk_dicts(_iter_script_objects(html, '"mediaItemsCount"')):
        if data.get("mediaItemsCount"):
            total_count = _as_int(data["mediaItemsCount"])
    return total_count


def _iter_script_objects(html: str, marker: str) -> Iterator[dict[str, object]]:
    """Yield top-level JSON objects embedded in scripts that mention ``marker``."""
    for script in _SCRIPT_BODY.finditer(html):
        body = script.group(1)
        if marker not in body:
            continue
        position = body.find("{")
        while position != -1:
            try:
                data, end = _JSON_DECODER.raw_decode(body, position)
            except ValueError:
                position = body.find("{", position + 1)
                continue
            if isinstance(data, dict) and marker in body[position:end]:
                yield data
            position = body.find("{", end)


def _walk_dicts(objects: Iterable[object]) -> Iterator[dict[str, object]]:
    """Yield every dict nested anywhere inside the given JSON values."""
    stack = list(objects)
    while stack:
        value = stack.pop(0)
        if isinstance(value, dict):
            yield value
            stack.extend(value.values())
        elif isinstance(value, list):
            stack.extend(value)


def _as_int(value: object) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0

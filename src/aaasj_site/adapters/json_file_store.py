"""JSON-file persistence for events and shared albums."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from aaasj_site.domain.albums import SharedAlbum, album_from_dict, album_to_dict
from aaasj_site.domain.events import EventItem, event_from_dict, event_to_dict
from aaasj_site.services.albums import AlbumRepository
from aaasj_site.services.events import EventRepository

EVENTS_FILENAME = "events.json"
ALBUMS_FILENAME = "shared-albums.json"

_logger = logging.getLogger(__name__)


@dataclass
class JsonArrayFile:
    """A JSON file holding a single array of records."""

    path: Path

    def read(self) -> list[dict[str, object]]:
        """Return the stored records; a missing or corrupt file reads as empty."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            _logger.warning("Ignoring unreadable data file %s", self.path)
            return []
        if not isinstance(data, list):
            _logger.warning("Ignoring non-array data file %s", self.path)
            return []
        return [row for row in data if isinstance(row, dict)]

    def write(self, rows: list[dict[str, object]]) -> None:
        """Replace the file contents with the given records."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(rows, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        tmp_path.replace(self.path)


@dataclass
class JsonEventRepository(EventRepository):
    """Event repository backed by ``events.json``."""

    file: JsonArrayFile

    @classmethod
    def in_directory(cls, data_dir: Path) -> "JsonEventRepository":
        """Create a repository storing events under ``data_dir``."""
        return cls(file=JsonArrayFile(data_dir / EVENTS_FILENAME))

    def list_events(self) -> list[EventItem]:
        """Return every stored event."""
        return [event_from_dict(row) for row in self.file.read() if "id" in row]

    def add_events(self, events: list[EventItem]) -> None:
        """Append events to the file."""
        rows = self.file.read()
        rows.extend(event_to_dict(event) for event in events)
        self.file.write(rows)

    def replace_event(self, event: EventItem) -> None:
        """Replace the stored event with the same id."""
        rows = [
            event_to_dict(event) if row.get("id") == event.id else row
            for row in self.file.read()
        ]
        self.file.write(rows)

    def delete_event(self, event_id: str) -> bool:
        """Delete an event by id."""
        rows = self.file.read()
        remaining = [row for row in rows if row.get("id") != event_id]
        self.file.write(remaining)
        return len(remaining) != len(rows)


@dataclass
class JsonAlbumRepository(AlbumRepository):
    """Album repository backed by ``shared-albums.json``."""

    file: JsonArrayFile

    @classmethod
    def in_directory(cls, data_dir: Path) -> "JsonAlbumRepository":
        """Create a repository storing albums under ``data_dir``."""
        return cls(file=JsonArrayFile(data_dir / ALBUMS_FILENAME))

    def list_albums(self) -> list[SharedAlbum]:
        """Return every stored album."""
        return [album_from_dict(row) for row in self.file.read() if "id" in row]

    def add_album(self, album: SharedAlbum) -> None:
        """Append an album to the file."""
        rows = self.file.read()
        rows.append(album_to_dict(album))
        self.file.write(rows)

    def replace_album(self, album: SharedAlbum) -> None:
        """Replace the stored album with the same id."""
        rows = [
            album_to_dict(album) if row.get("id") == album.id else row
            for row in self.file.read()
        ]
        self.file.write(rows)

    def delete_album(self, album_id: str) -> bool:
        """Delete an album by id."""
        rows = self.file.read()
        remaining = [row for row in rows if row.get("id") != album_id]
        if len(remaining) == len(rows):
            return False
        self.file.write(remaining)
        return True

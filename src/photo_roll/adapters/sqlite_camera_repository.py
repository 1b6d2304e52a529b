"""SQLite-backed store for the captured camera photo."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from photo_roll.domain.mirror import CameraPhoto
from photo_roll.services.camera import CameraPhotoRepository

IMAGES_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS images (
    id INTEGER PRIMARY KEY,
    uri TEXT NOT NULL,
    captured_at TEXT NOT NULL
);
"""

_SLOT_ID = 1


@dataclass
class SqliteCameraPhotoRepository(CameraPhotoRepository):
    """SQLite implementation holding a single camera photo row."""

    db_path: Path

    def save(self, uri: str) -> CameraPhoto:
        """Insert or replace the camera photo row."""
        photo = CameraPhoto(uri=uri, captured_at=datetime.now(tz=UTC))
        with self._open() as connection:
            connection.execute(
                "INSERT OR REPLACE INTO images (id, uri, captured_at) VALUES (?, ?, ?)",
                (_SLOT_ID, photo.uri, photo.captured_at.isoformat()),
            )
            connection.commit()
        return photo

    def get_latest(self) -> CameraPhoto | None:
        """Return the stored camera photo, if present."""
        with self._open() as connection:
            row = connection.execute(
                "SELECT uri, captured_at FROM images LIMIT 1"
            ).fetchone()
        if row is None:
            return None
        return CameraPhoto(
            uri=row["uri"],
            captured_at=datetime.fromisoformat(row["captured_at"]),
        )

    @contextmanager
    def _open(self) -> Iterator[sqlite3.Connection]:
        path = Path(self.db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        connection = sqlite3.connect(path)
        connection.row_factory = sqlite3.Row
        try:
            connection.executescript(IMAGES_TABLE_SCHEMA)
            yield connection
        finally:
            connection.close()

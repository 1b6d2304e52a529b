"""Tests for the SQLite camera photo repository."""

from pathlib import Path

from photo_roll.adapters.sqlite_camera_repository import SqliteCameraPhotoRepository


def test_get_latest_empty(tmp_path: Path) -> None:
    repository = SqliteCameraPhotoRepository(tmp_path / "camera.db")

    assert repository.get_latest() is None


def test_save_replaces_single_slot(tmp_path: Path) -> None:
    repository = SqliteCameraPhotoRepository(tmp_path / "nested" / "camera.db")

    repository.save("content://images/first.jpg")
    saved = repository.save("content://images/second.jpg")

    latest = repository.get_latest()
    assert latest == saved
    assert latest is not None
    assert latest.uri == "content://images/second.jpg"


def test_saved_photo_survives_new_repository(tmp_path: Path) -> None:
    db_path = tmp_path / "camera.db"
    SqliteCameraPhotoRepository(db_path).save("content://images/kept.jpg")

    latest = SqliteCameraPhotoRepository(db_path).get_latest()

    assert latest is not None
    assert latest.uri == "content://images/kept.jpg"

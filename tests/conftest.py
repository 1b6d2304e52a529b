"""Shared test fixtures."""

import random
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from photo_roll.config import Settings
from photo_roll.containers import AppContainer
from photo_roll.domain.mirror import CameraPhoto, MirrorRecord
from photo_roll.domain.photos import MarsPhoto, PicsumPhoto
from photo_roll.services.camera import CameraPhotoRepository
from photo_roll.services.controller import PhotoController
from photo_roll.services.mirror import MirrorStore, MirrorStoreError

MARS_PHOTOS = [
    MarsPhoto(id="424905", img_src="https://mars.example/424905.jpg"),
    MarsPhoto(id="424906", img_src="https://mars.example/424906.jpg"),
    MarsPhoto(id="424907", img_src="https://mars.example/424907.jpg"),
]

PICSUM_PHOTOS = [
    PicsumPhoto(
        id="0",
        author="Alejandro Escamilla",
        width=5000,
        height=3333,
        url="https://unsplash.com/photos/yC-Yzbqy7PY",
        download_url="https://picsum.photos/id/0/5000/3333",
    ),
    PicsumPhoto(
        id="1",
        author="Alejandro Escamilla",
        width=5000,
        height=3333,
        url="https://unsplash.com/photos/LNRyGwIJr5c",
        download_url="https://picsum.photos/id/1/5000/3333",
    ),
]


@dataclass
class FakePhotoRepository:
    """Photo repository returning a fixed list or raising a fixed error."""

    photos: list[object] = field(default_factory=list)
    error: Exception | None = None
    calls: int = 0

    async def fetch_all(self) -> list[object]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.photos)


@dataclass
class InMemoryMirrorStore(MirrorStore):
    """In-memory mirror store for tests."""

    record: MirrorRecord | None = None
    count: int | None = None
    camera_pic: str | None = None
    fail: bool = False

    async def save_latest(
        self, mars_photo: MarsPhoto, picsum_photo: PicsumPhoto
    ) -> None:
        self._check()
        self.record = MirrorRecord(mars_photo=mars_photo, picsum_photo=picsum_photo)

    async def read_latest(self) -> MirrorRecord:
        self._check()
        return self.record or MirrorRecord()

    async def increment_roll_count(self) -> int:
        self._check()
        self.count = 1 if self.count is None else self.count + 1
        return self.count

    async def save_camera_photo(self, uri: str) -> None:
        self._check()
        self.camera_pic = uri

    def _check(self) -> None:
        if self.fail:
            raise MirrorStoreError("mirror store unavailable")


@dataclass
class InMemoryCameraPhotoRepository(CameraPhotoRepository):
    """In-memory camera photo repository for tests."""

    photo: CameraPhoto | None = None
    threads: list[int] = field(default_factory=list)

    def save(self, uri: str) -> CameraPhoto:
        self.threads.append(threading.get_ident())
        self.photo = CameraPhoto(uri=uri, captured_at=datetime.now(tz=UTC))
        return self.photo

    def get_latest(self) -> CameraPhoto | None:
        self.threads.append(threading.get_ident())
        return self.photo


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
            ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
            ".c2lnbmF0dXJl"
        ),
        camera_db_path=tmp_path / "camera.db",
    )


@pytest.fixture
def mars_repository() -> FakePhotoRepository:
    return FakePhotoRepository(photos=list(MARS_PHOTOS))


@pytest.fixture
def picsum_repository() -> FakePhotoRepository:
    return FakePhotoRepository(photos=list(PICSUM_PHOTOS))


@pytest.fixture
def mirror_store() -> InMemoryMirrorStore:
    return InMemoryMirrorStore()


@pytest.fixture
def camera_repository() -> InMemoryCameraPhotoRepository:
    return InMemoryCameraPhotoRepository()


@pytest.fixture
def controller(
    mars_repository: FakePhotoRepository,
    picsum_repository: FakePhotoRepository,
    mirror_store: InMemoryMirrorStore,
    camera_repository: InMemoryCameraPhotoRepository,
) -> PhotoController:
    return PhotoController(
        mars_repository=mars_repository,
        picsum_repository=picsum_repository,
        mirror_store=mirror_store,
        camera_repository=camera_repository,
        rng=random.Random(7),
    )


@pytest.fixture
def container(settings: Settings, controller: PhotoController) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        controller=controller,
        close_resources=close_resources,
    )

"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photo_roll.adapters.photo_list_client import HttpxPhotoListClient
from photo_roll.adapters.sqlite_camera_repository import SqliteCameraPhotoRepository
from photo_roll.adapters.supabase_mirror_store import SupabaseMirrorStore
from photo_roll.config import Settings
from photo_roll.services.controller import PhotoController
from photo_roll.services.photos import MarsPhotoRepository, PicsumPhotoRepository


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    controller: PhotoController
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    mars_client = HttpxPhotoListClient.create(
        base_url=resolved_settings.mars_base_url,
        path=resolved_settings.mars_photos_path,
        timeout=resolved_settings.http_timeout_seconds,
    )
    picsum_client = HttpxPhotoListClient.create(
        base_url=resolved_settings.picsum_base_url,
        path=resolved_settings.picsum_list_path,
        timeout=resolved_settings.http_timeout_seconds,
    )
    controller = PhotoController(
        mars_repository=MarsPhotoRepository(mars_client),
        picsum_repository=PicsumPhotoRepository(picsum_client),
        mirror_store=SupabaseMirrorStore(supabase_client),
        camera_repository=SqliteCameraPhotoRepository(resolved_settings.camera_db_path),
    )

    async def close_resources() -> None:
        await mars_client.close()
        await picsum_client.close()

    return AppContainer(
        settings=resolved_settings,
        controller=controller,
        close_resources=close_resources,
    )

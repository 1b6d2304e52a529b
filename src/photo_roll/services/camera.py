"""Local camera photo persistence interface."""

from typing import Protocol

from photo_roll.domain.mirror import CameraPhoto


class CameraPhotoRepository(Protocol):
    """Persistence interface for the single captured camera photo."""

    def save(self, uri: str) -> CameraPhoto:
        """Store a captured photo URI, replacing any previous one."""

    def get_latest(self) -> CameraPhoto | None:
        """Return the stored camera photo, if any."""

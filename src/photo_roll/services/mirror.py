"""Remote mirror store interface."""

from typing import Protocol

from photo_roll.domain.mirror import MirrorRecord
from photo_roll.domain.photos import MarsPhoto, PicsumPhoto


class MirrorStoreError(RuntimeError):
    """Raised when a mirror store operation fails."""


class MirrorStore(Protocol):
    """Persistence interface for the mirrored photo pair and roll counter.

    Every call either returns its value or raises ``MirrorStoreError``.
    """

    async def save_latest(
        self, mars_photo: MarsPhoto, picsum_photo: PicsumPhoto
    ) -> None:
        """Replace the saved photo pair."""

    async def read_latest(self) -> MirrorRecord:
        """Return the saved photo pair, with absent sides as None."""

    async def increment_roll_count(self) -> int:
        """Increment the roll counter and return the stored value."""

    async def save_camera_photo(self, uri: str) -> None:
        """Replace the mirrored camera photo URI."""

"""Domain models for mirrored and locally saved photos."""

from dataclasses import dataclass
from datetime import datetime

from photo_roll.domain.photos import MarsPhoto, PicsumPhoto


@dataclass(frozen=True)
class MirrorRecord:
    """The latest photo pair saved to the mirror store."""

    mars_photo: MarsPhoto | None = None
    picsum_photo: PicsumPhoto | None = None


@dataclass(frozen=True)
class CameraPhoto:
    """A captured camera photo stored on the device."""

    uri: str
    captured_at: datetime

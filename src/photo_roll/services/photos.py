"""Photo repositories backed by the upstream list endpoints."""

from dataclasses import dataclass
from typing import Protocol, TypeVar

from photo_roll.adapters.photo_list_client import PhotoListClient
from photo_roll.domain.photos import MarsPhoto, PicsumPhoto

T_co = TypeVar("T_co", covariant=True)


class PhotoRepository(Protocol[T_co]):
    """Source of photo records for one provider."""

    async def fetch_all(self) -> list[T_co]:
        """Return every photo the provider lists, in server order."""


@dataclass
class MarsPhotoRepository(PhotoRepository[MarsPhoto]):
    """Network repository for Mars rover photos."""

    client: PhotoListClient

    async def fetch_all(self) -> list[MarsPhoto]:
        """Fetch and validate the Mars photo list."""
        rows = await self.client.list_photos()
        return [MarsPhoto.model_validate(row) for row in rows]


@dataclass
class PicsumPhotoRepository(PhotoRepository[PicsumPhoto]):
    """Network repository for Picsum photos."""

    client: PhotoListClient

    async def fetch_all(self) -> list[PicsumPhoto]:
        """Fetch and validate the Picsum photo list."""
        rows = await self.client.list_photos()
        return [PicsumPhoto.model_validate(row) for row in rows]

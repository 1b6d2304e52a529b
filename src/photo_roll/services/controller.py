"""Selection and state controller for the two photo providers."""

import asyncio
import logging
import random
from dataclasses import dataclass, field

import httpx

from photo_roll.domain.mirror import CameraPhoto, MirrorRecord
from photo_roll.domain.photos import MarsPhoto, PicsumPhoto, Provider, UrlFilter
from photo_roll.domain.status import Error, FetchStatus, Loading, Success
from photo_roll.services.camera import CameraPhotoRepository
from photo_roll.services.mirror import MirrorStore
from photo_roll.services.photos import PhotoRepository

_PROVIDER_LABELS = {
    Provider.MARS: "Mars",
    Provider.PICSUM: "picsum",
}

_logger = logging.getLogger(__name__)


@dataclass
class PhotoController:
    """Owns the per-provider fetch status and forwards commands to the stores.

    Each provider moves through ``Loading`` to ``Success`` or ``Error`` on every
    refresh. Refreshes carry a generation number so a slow response from an
    older refresh never overwrites the result of a newer one.
    """

    mars_repository: PhotoRepository[MarsPhoto]
    picsum_repository: PhotoRepository[PicsumPhoto]
    mirror_store: MirrorStore
    camera_repository: CameraPhotoRepository
    rng: random.Random = field(default_factory=random.Random)
    mars_status: FetchStatus = field(default_factory=Loading, init=False)
    picsum_status: FetchStatus = field(default_factory=Loading, init=False)
    roll_count: int | None = field(default=None, init=False)
    _generations: dict[Provider, int] = field(
        default_factory=lambda: dict.fromkeys(Provider, 0), init=False, repr=False
    )

    async def start(self) -> None:
        """Run the initial fetch for both providers."""
        await asyncio.gather(self.refresh_mars(), self.refresh_picsum())

    async def refresh_mars(self) -> FetchStatus:
        """Fetch Mars photos and pick one."""
        return await self.refresh(Provider.MARS)

    async def refresh_picsum(self) -> FetchStatus:
        """Fetch Picsum photos and pick one."""
        return await self.refresh(Provider.PICSUM)

    async def refresh(self, provider: Provider) -> FetchStatus:
        """Fetch a provider's photo list and select one photo at random."""
        self._generations[provider] += 1
        generation = self._generations[provider]
        self._set_status(provider, Loading())

        repository = self._repository(provider)
        label = _PROVIDER_LABELS[provider]
        status: FetchStatus
        try:
            photos = await repository.fetch_all()
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning("Fetching %s photos failed: %s", label, exc)
            status = Error()
        else:
            if photos:
                status = Success(
                    message=f"{len(photos)} {label} photos retrieved",
                    photo=self.rng.choice(photos),
                )
            else:
                _logger.warning("No %s photos returned", label)
                status = Error()

        if generation != self._generations[provider]:
            _logger.info("Discarding stale %s refresh", label)
            return self.status(provider)
        self._set_status(provider, status)
        return status

    async def roll(self) -> int:
        """Refresh both providers and count the roll."""
        await self.start()
        return await self.increment_roll()

    def status(self, provider: Provider) -> FetchStatus:
        """Return the current status for a provider."""
        if provider is Provider.MARS:
            return self.mars_status
        return self.picsum_status

    def apply_filter(self, kind: UrlFilter) -> FetchStatus:
        """Append a filter fragment to the current Picsum download URL.

        Fragments are appended literally, so repeated calls stack.
        """
        status = self.picsum_status
        if not isinstance(status, Success):
            return status
        photo = status.photo.model_copy(
            update={"download_url": f"{status.photo.download_url}{kind.fragment}"}
        )
        self.picsum_status = Success(message=status.message, photo=photo)
        return self.picsum_status

    def apply_blur(self) -> FetchStatus:
        """Blur the current Picsum photo."""
        return self.apply_filter(UrlFilter.BLUR)

    def apply_gray(self) -> FetchStatus:
        """Gray out the current Picsum photo."""
        return self.apply_filter(UrlFilter.GRAYSCALE)

    async def save(self) -> bool:
        """Mirror the displayed photo pair when both providers succeeded."""
        mars, picsum = self.mars_status, self.picsum_status
        if not (isinstance(mars, Success) and isinstance(picsum, Success)):
            _logger.info("Skipping save until both photos are loaded")
            return False
        await self.mirror_store.save_latest(mars.photo, picsum.photo)
        return True

    async def load(self) -> MirrorRecord:
        """Overlay the mirrored photo pair onto the displayed photos."""
        record = await self.mirror_store.read_latest()
        mars, picsum = self.mars_status, self.picsum_status
        if record.mars_photo is not None and isinstance(mars, Success):
            self.mars_status = Success(message=mars.message, photo=record.mars_photo)
        if record.picsum_photo is not None and isinstance(picsum, Success):
            self.picsum_status = Success(
                message=picsum.message, photo=record.picsum_photo
            )
        return record

    async def increment_roll(self) -> int:
        """Increment the mirrored roll counter."""
        self.roll_count = await self.mirror_store.increment_roll_count()
        return self.roll_count

    async def save_camera_photo(self, uri: str) -> CameraPhoto:
        """Store a captured camera photo locally and mirror its URI.

        The local row is written first and kept when mirroring fails; the
        ``MirrorStoreError`` still propagates.
        """
        photo = await asyncio.to_thread(self.camera_repository.save, uri)
        await self.mirror_store.save_camera_photo(uri)
        return photo

    async def latest_camera_photo(self) -> CameraPhoto | None:
        """Return the locally stored camera photo."""
        return await asyncio.to_thread(self.camera_repository.get_latest)

    def _repository(
        self, provider: Provider
    ) -> PhotoRepository[MarsPhoto] | PhotoRepository[PicsumPhoto]:
        if provider is Provider.MARS:
            return self.mars_repository
        return self.picsum_repository

    def _set_status(self, provider: Provider, status: FetchStatus) -> None:
        if provider is Provider.MARS:
            self.mars_status = status
        else:
            self.picsum_status = status

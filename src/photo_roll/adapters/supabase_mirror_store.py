"""Supabase-backed mirror store for the latest photo pair and roll count."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeVar

from supabase import Client

from photo_roll.domain.mirror import MirrorRecord
from photo_roll.domain.photos import MarsPhoto, PicsumPhoto
from photo_roll.services.mirror import MirrorStore, MirrorStoreError

SAVED_IMAGES_TABLE = "saved_images"
ROLL_COUNT_TABLE = "roll_count"

LATEST_PICTURES_ID = "latest_pictures"
CAMERA_PHOTO_ID = "camera_photo"
ROLL_COUNT_ID = "roll_count"

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SupabaseMirrorStore(MirrorStore):
    """Supabase implementation of the mirror store.

    The saved pair lives in a single row keyed by ``latest_pictures`` and is
    replaced with an upsert. The counter is created with a plain insert and
    then advanced by a conditional update, so a concurrent writer makes the
    call fail instead of silently losing or rewinding an increment.
    """

    client: Client

    async def save_latest(
        self, mars_photo: MarsPhoto, picsum_photo: PicsumPhoto
    ) -> None:
        """Upsert the latest photo pair."""

        def _save() -> None:
            self.client.table(SAVED_IMAGES_TABLE).upsert(
                {
                    "id": LATEST_PICTURES_ID,
                    "mars": mars_photo.model_dump_json(),
                    "picsum": picsum_photo.model_dump_json(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="id",
            ).execute()

        await self._run(_save, action="save latest pictures")
        _logger.info(
            "Saved latest pictures: mars=%s picsum=%s", mars_photo.id, picsum_photo.id
        )

    async def read_latest(self) -> MirrorRecord:
        """Return the saved photo pair, or an empty record if none was saved."""

        def _read() -> MirrorRecord:
            response = (
                self.client.table(SAVED_IMAGES_TABLE)
                .select("mars, picsum")
                .eq("id", LATEST_PICTURES_ID)
                .limit(1)
                .execute()
            )
            if not response.data:
                return MirrorRecord()
            row = response.data[0]
            mars_raw = row.get("mars")
            picsum_raw = row.get("picsum")
            return MirrorRecord(
                mars_photo=(
                    MarsPhoto.model_validate_json(mars_raw) if mars_raw else None
                ),
                picsum_photo=(
                    PicsumPhoto.model_validate_json(picsum_raw) if picsum_raw else None
                ),
            )

        return await self._run(_read, action="read latest pictures")

    async def increment_roll_count(self) -> int:
        """Increment the roll counter, initializing it to 1 when absent."""

        def _increment() -> int:
            table = self.client.table(ROLL_COUNT_TABLE)
            response = (
                table.select("count").eq("id", ROLL_COUNT_ID).limit(1).execute()
            )
            if not response.data:
                # A primary-key conflict here means another caller initialized
                # the counter first; it surfaces as a failure.
                table.insert({"id": ROLL_COUNT_ID, "count": 1}).execute()
                return 1
            if response.data[0].get("count") is None:
                initialized = (
                    table.update({"count": 1})
                    .eq("id", ROLL_COUNT_ID)
                    .is_("count", "null")
                    .execute()
                )
                if not initialized.data:
                    raise MirrorStoreError("Roll count changed concurrently")
                return 1
            current = int(response.data[0]["count"])
            updated = (
                table.update({"count": current + 1})
                .eq("id", ROLL_COUNT_ID)
                .eq("count", current)
                .execute()
            )
            if not updated.data:
                raise MirrorStoreError("Roll count changed concurrently")
            return int(updated.data[0]["count"])

        count = await self._run(_increment, action="increment roll count")
        _logger.info("Roll count incremented to %s", count)
        return count

    async def save_camera_photo(self, uri: str) -> None:
        """Upsert the mirrored camera photo URI."""

        def _save() -> None:
            self.client.table(SAVED_IMAGES_TABLE).upsert(
                {
                    "id": CAMERA_PHOTO_ID,
                    "camera_pic": uri,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="id",
            ).execute()

        await self._run(_save, action="save camera photo")

    async def _run(self, func: Callable[[], T], *, action: str) -> T:
        """Run a blocking Supabase call off the event loop."""
        try:
            return await asyncio.to_thread(func)
        except MirrorStoreError:
            _logger.warning("Mirror store failed to %s", action)
            raise
        except Exception as exc:
            _logger.warning("Mirror store failed to %s: %s", action, exc)
            raise MirrorStoreError(f"Failed to {action}") from exc

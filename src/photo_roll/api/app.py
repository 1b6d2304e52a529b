"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from photo_roll.api.models import CameraPhotoRequest
from photo_roll.app_logging import configure_logging
from photo_roll.containers import AppContainer
from photo_roll.domain.mirror import CameraPhoto, MirrorRecord
from photo_roll.domain.photos import Provider
from photo_roll.domain.status import Error, FetchStatus, Success
from photo_roll.services.controller import PhotoController
from photo_roll.services.mirror import MirrorStoreError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.container.controller.start()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(MirrorStoreError)
    async def mirror_store_error(
        request: Request, exc: MirrorStoreError
    ) -> JSONResponse:
        logger.warning("Mirror store request failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/state")
    async def state(request: Request) -> dict[str, object]:
        """Return both provider statuses and the roll count."""
        return _state_payload(_controller(request))

    @app.post("/mars/refresh")
    async def refresh_mars(request: Request) -> dict[str, object]:
        """Retry the Mars fetch."""
        return _status_payload(await _controller(request).refresh(Provider.MARS))

    @app.post("/picsum/refresh")
    async def refresh_picsum(request: Request) -> dict[str, object]:
        """Retry the Picsum fetch."""
        return _status_payload(await _controller(request).refresh(Provider.PICSUM))

    @app.post("/roll")
    async def roll(request: Request) -> dict[str, object]:
        """Pick a fresh photo pair and count the roll."""
        controller = _controller(request)
        await controller.roll()
        return _state_payload(controller)

    @app.post("/picsum/blur")
    async def blur(request: Request) -> dict[str, object]:
        """Blur the current Picsum photo."""
        return _status_payload(_controller(request).apply_blur())

    @app.post("/picsum/grayscale")
    async def grayscale(request: Request) -> dict[str, object]:
        """Gray out the current Picsum photo."""
        return _status_payload(_controller(request).apply_gray())

    @app.post("/save")
    async def save(request: Request) -> dict[str, str]:
        """Mirror the displayed photo pair."""
        if not await _controller(request).save():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Both photos must be loaded before saving",
            )
        return {"status": "saved"}

    @app.post("/load")
    async def load(request: Request) -> dict[str, object]:
        """Overlay the mirrored photo pair onto the displayed photos."""
        controller = _controller(request)
        record = await controller.load()
        return {"saved": _record_payload(record), **_state_payload(controller)}

    @app.post("/roll-count/increment")
    async def increment_roll(request: Request) -> dict[str, int]:
        """Increment the mirrored roll count."""
        return {"roll_count": await _controller(request).increment_roll()}

    @app.get("/camera")
    async def camera_photo(request: Request) -> dict[str, object]:
        """Return the locally stored camera photo."""
        photo = await _controller(request).latest_camera_photo()
        return {"camera_photo": _camera_payload(photo)}

    @app.post("/camera")
    async def save_camera_photo(
        payload: CameraPhotoRequest, request: Request
    ) -> dict[str, object]:
        """Store a captured camera photo and mirror its URI."""
        photo = await _controller(request).save_camera_photo(payload.uri)
        return {"camera_photo": _camera_payload(photo)}

    return app


def _controller(request: Request) -> PhotoController:
    container: AppContainer = request.app.state.container
    return container.controller


def _state_payload(controller: PhotoController) -> dict[str, object]:
    return {
        "mars": _status_payload(controller.mars_status),
        "picsum": _status_payload(controller.picsum_status),
        "roll_count": controller.roll_count,
    }


def _status_payload(fetch_status: FetchStatus) -> dict[str, object]:
    if isinstance(fetch_status, Success):
        return {
            "state": "success",
            "message": fetch_status.message,
            "photo": fetch_status.photo.model_dump(),
        }
    if isinstance(fetch_status, Error):
        return {"state": "error"}
    return {"state": "loading"}


def _record_payload(record: MirrorRecord) -> dict[str, object]:
    return {
        "mars": record.mars_photo.model_dump() if record.mars_photo else None,
        "picsum": record.picsum_photo.model_dump() if record.picsum_photo else None,
    }


def _camera_payload(photo: CameraPhoto | None) -> dict[str, str] | None:
    if photo is None:
        return None
    return {"uri": photo.uri, "captured_at": photo.captured_at.isoformat()}

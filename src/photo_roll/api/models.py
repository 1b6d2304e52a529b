"""Request models for the command API."""

from pydantic import BaseModel, Field


class CameraPhotoRequest(BaseModel):
    """Captured camera photo reported by the client."""

    uri: str = Field(min_length=1)

"""Photo records returned by the upstream photo APIs."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Provider(StrEnum):
    """Upstream photo sources."""

    MARS = "mars"
    PICSUM = "picsum"


class MarsPhoto(BaseModel):
    """Single photo from the Mars rover catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    img_src: str


class PicsumPhoto(BaseModel):
    """Single photo from the Picsum list endpoint."""

    model_config = ConfigDict(frozen=True)

    id: str
    author: str
    width: int
    height: int
    url: str
    download_url: str


class UrlFilter(StrEnum):
    """Picsum query-string transforms."""

    BLUR = "blur"
    GRAYSCALE = "grayscale"

    @property
    def fragment(self) -> str:
        """Return the literal fragment appended to a download URL."""
        return f"?{self.value}"

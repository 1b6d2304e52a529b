"""ASGI entrypoint for the photo roll API."""

from photo_roll.api.app import create_app
from photo_roll.containers import build_container

app = create_app(build_container())

"""Tri-state fetch status held per provider."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight."""


@dataclass(frozen=True)
class Error:
    """The last fetch failed or returned nothing to choose from."""


@dataclass(frozen=True)
class Success(Generic[T]):
    """The last fetch succeeded and one photo was picked."""

    message: str
    photo: T


FetchStatus = Loading | Error | Success

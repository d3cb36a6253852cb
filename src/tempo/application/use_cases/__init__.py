"""Use cases for ingesting observed tracks."""

from .resolve_existing_track import (
    ResolveExistingTrackCommand,
    ResolveExistingTrackResult,
    ResolveExistingTrackUseCase,
    should_adopt_artist,
)

__all__ = [
    "ResolveExistingTrackCommand",
    "ResolveExistingTrackResult",
    "ResolveExistingTrackUseCase",
    "should_adopt_artist",
]

"""Domain layer test fixtures - pure value objects with no dependencies."""

import pytest

from tempo.domain.matching.types import TrackCandidate


@pytest.fixture
def library():
    """Small stored library in the order the storage layer would return it."""
    return [
        TrackCandidate(id=1, title="Rolling in the Deep", artist="Adele"),
        TrackCandidate(id=2, title="Hello (Official Music Video)", artist="Adele"),
        TrackCandidate(id=3, title="Paranoid Android", artist="Radiohead"),
        TrackCandidate(id=4, title="Rockstar", artist="21 Savage"),
    ]

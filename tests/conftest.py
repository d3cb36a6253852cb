import pytest

from tempo.config import settings


@pytest.fixture
def matching_settings(monkeypatch):
    """Matching preferences that tests may change without leaking."""
    monkeypatch.setattr(settings.matching, "merge_alternate_versions", True)
    monkeypatch.setattr(settings.matching, "track_match_threshold", 0.85)
    return settings.matching

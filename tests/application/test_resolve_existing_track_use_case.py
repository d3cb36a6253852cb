"""Tests for ResolveExistingTrackUseCase."""

import pytest

from tempo.application.use_cases.resolve_existing_track import (
    ResolveExistingTrackCommand,
    ResolveExistingTrackUseCase,
    should_adopt_artist,
)
from tempo.domain.matching.types import MatchType, TrackCandidate


@pytest.fixture
def use_case():
    return ResolveExistingTrackUseCase()


class TestResolveExistingTrackCommand:
    """Test command validation and defaults."""

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold):
        """Test that thresholds outside [0, 1] are rejected."""
        with pytest.raises(ValueError, match="between 0 and 1"):
            ResolveExistingTrackCommand(title="Song", artist="Artist", match_threshold=threshold)

    def test_defaults_from_settings(self, matching_settings):
        """Test that unset preferences come from settings."""
        command = ResolveExistingTrackCommand(title="Song", artist="Artist")

        assert command.resolved_strict_matching() is False
        assert command.resolved_threshold() == 0.85

        matching_settings.merge_alternate_versions = False
        assert command.resolved_strict_matching() is True

    def test_explicit_preferences_win(self, matching_settings):
        """Test that command values override settings."""
        command = ResolveExistingTrackCommand(
            title="Song", artist="Artist", strict_matching=True, match_threshold=0.5
        )

        assert command.resolved_strict_matching() is True
        assert command.resolved_threshold() == 0.5


class TestResolveExistingTrackUseCase:
    """Test the resolution chain."""

    def test_exact(self, use_case, matching_settings):
        """Test case-insensitive exact resolution."""
        stored = TrackCandidate(id=7, title="Hello", artist="Adele")
        command = ResolveExistingTrackCommand(title="HELLO", artist="adele", candidates=[stored])

        result = use_case.execute(command)

        assert result.resolution == "exact"
        assert result.candidate is stored
        assert result.match is None
        assert result.is_existing

    def test_fuzzy(self, use_case, matching_settings):
        """Test that a normalized match above the threshold resolves."""
        stored = TrackCandidate(id=7, title="Hello", artist="Adele")
        command = ResolveExistingTrackCommand(
            title="Hello (Official Music Video)", artist="Adele", candidates=[stored]
        )

        result = use_case.execute(command)

        assert result.resolution == "fuzzy"
        assert result.candidate is stored
        assert result.match.match_type is MatchType.EXACT

    def test_below_threshold_falls_back_to_clean_title(self, use_case, matching_settings):
        """Test the clean-title fallback for a medium-tier candidate."""
        stored = TrackCandidate(id=7, title="Rockstar", artist="21 Savage")
        command = ResolveExistingTrackCommand(
            title="Rockstar", artist="Post Malone, 21 Savage", candidates=[stored]
        )

        result = use_case.execute(command)

        assert result.resolution == "clean_title"
        assert result.candidate is stored

    def test_lower_threshold_accepts_medium_match(self, use_case, matching_settings):
        """Test that the threshold decides the fuzzy step."""
        stored = TrackCandidate(id=7, title="Rockstar", artist="21 Savage")
        command = ResolveExistingTrackCommand(
            title="Rockstar",
            artist="Post Malone, 21 Savage",
            candidates=[stored],
            match_threshold=0.75,
        )

        result = use_case.execute(command)

        assert result.resolution == "fuzzy"
        assert result.match.match_type is MatchType.MEDIUM

    def test_clean_title_with_unknown_artist(self, use_case, matching_settings):
        """Test that a placeholder artist matches through the fallback."""
        stored = TrackCandidate(id=7, title="Sicko Mode", artist="<unknown>")
        command = ResolveExistingTrackCommand(
            title="Sicko Mode (feat. Drake)", artist="Travis Scott", candidates=[stored]
        )

        result = use_case.execute(command)

        assert result.resolution == "clean_title"
        assert result.candidate is stored

    def test_strict_keeps_versions_apart(self, use_case, matching_settings):
        """Test that strict matching creates a new track for a live cut."""
        stored = TrackCandidate(id=7, title="Song", artist="Artist")
        command = ResolveExistingTrackCommand(
            title="Song (Live)", artist="Artist", candidates=[stored], strict_matching=True
        )

        result = use_case.execute(command)

        assert result.resolution == "new"
        assert not result.is_existing

    def test_merge_joins_versions(self, use_case, matching_settings):
        """Test that merge mode attaches a live cut to the original."""
        stored = TrackCandidate(id=7, title="Song", artist="Artist")
        command = ResolveExistingTrackCommand(
            title="Song (Live)", artist="Artist", candidates=[stored]
        )

        result = use_case.execute(command)

        assert result.resolution == "fuzzy"
        assert result.candidate is stored

    def test_new(self, use_case, matching_settings):
        """Test that an unrelated observation is a new track."""
        stored = TrackCandidate(id=7, title="Hello", artist="Adele")
        command = ResolveExistingTrackCommand(
            title="Paranoid Android", artist="Radiohead", candidates=[stored]
        )

        result = use_case.execute(command)

        assert result.resolution == "new"
        assert result.candidate is None

    def test_empty_library(self, use_case, matching_settings):
        """Test that nothing stored means a new track."""
        result = use_case.execute(ResolveExistingTrackCommand(title="Hello", artist="Adele"))

        assert result.resolution == "new"


class TestShouldAdoptArtist:
    """Test replacing placeholder artists."""

    def test_placeholder_takes_real_artist(self):
        assert should_adopt_artist("Unknown Artist", "Adele")
        assert should_adopt_artist("", "Adele")

    def test_real_artist_kept(self):
        assert not should_adopt_artist("Adele", "Unknown")
        assert not should_adopt_artist("Adele", "Radiohead")

    def test_both_placeholders(self):
        assert not should_adopt_artist("", "<unknown>")

"""Tests for KissKH and Stremio domain entities."""

from __future__ import annotations

import dataclasses

import pytest

from kisskh.domain.entities import (
    EpisodeMedia,
    EpisodePattern,
    Extraction,
    ExtractionStatus,
    StremioRequest,
    SubtitleTrack,
)


class TestEpisodePattern:
    def test_episode_url_zero_pads(self, episode_pattern: EpisodePattern) -> None:
        assert episode_pattern.episode_url(5) == (
            "https://kisskh.club/show-a/show-a-episode/?server=02&episode=05"
        )

    def test_episode_url_two_digits_unchanged(
        self, episode_pattern: EpisodePattern
    ) -> None:
        assert episode_pattern.episode_url(12).endswith("&episode=12")

    def test_episode_url_custom_server(self, episode_pattern: EpisodePattern) -> None:
        assert "?server=03&" in episode_pattern.episode_url(1, server="03")


class TestExtraction:
    def test_found(self) -> None:
        result = Extraction(ExtractionStatus.FOUND, "123")
        assert result.found is True
        assert result.detail == ""

    @pytest.mark.parametrize(
        "status", [ExtractionStatus.NOT_FOUND, ExtractionStatus.MALFORMED]
    )
    def test_not_found_statuses(self, status: ExtractionStatus) -> None:
        assert Extraction(status, None).found is False

    def test_status_values_are_strings(self) -> None:
        assert ExtractionStatus.MALFORMED.value == "malformed"


class TestStremioEntities:
    def test_request_defaults_to_first_episode(self) -> None:
        request = StremioRequest(imdb_id="tt1", content_type="movie")
        assert request.season == 1
        assert request.episode == 1

    def test_subtitle_track_defaults_to_spanish(self) -> None:
        track = SubtitleTrack(id="u", url="u", label="Spanish (KissKH)")
        assert track.language_code == "spa"

    def test_entities_are_frozen(self) -> None:
        track = SubtitleTrack(id="u", url="u", label="l")
        with pytest.raises(dataclasses.FrozenInstanceError):
            track.url = "other"  # type: ignore[misc]

    def test_episode_media_defaults_empty(self) -> None:
        media = EpisodeMedia()
        assert media.video_url is None
        assert media.subtitle_urls == []

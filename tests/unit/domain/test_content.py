"""Tests for RokuContent."""

from __future__ import annotations

import pytest

from rokucast.domain.entities.content import RokuContent


class TestRokuContent:
    def test_blank_channel_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="channel_id"):
            RokuContent(channel_id=" ", content_id="1")

    def test_blank_content_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="content_id"):
            RokuContent(channel_id="12", content_id="")

    def test_dedup_key(self) -> None:
        assert RokuContent(channel_id="12", content_id="80100172").dedup_key == (
            "12-80100172"
        )

    def test_resume_position_ticks(self) -> None:
        content = RokuContent("44191", "1", metadata={"resume_position_ticks": "42"})
        assert content.resume_position_ticks == 42

    def test_resume_position_missing_or_invalid(self) -> None:
        assert RokuContent("44191", "1").resume_position_ticks is None
        bad = RokuContent("44191", "1", metadata={"resume_position_ticks": "soon"})
        assert bad.resume_position_ticks is None


class TestFromDict:
    def test_camel_case_library_entry(self) -> None:
        content = RokuContent.from_dict(
            {
                "channelId": "44191",
                "contentId": "541",
                "mediaType": "Movie",
                "title": "The Matrix (1999)",
                "channelName": "Emby",
                "metadata": {"resumePositionTicks": 600, "seriesName": None},
            }
        )
        assert content.channel_id == "44191"
        assert content.content_id == "541"
        assert content.media_type == "Movie"
        assert content.channel_name == "Emby"
        assert content.metadata == {"resume_position_ticks": 600}
        assert content.resume_position_ticks == 600

    def test_snake_case(self) -> None:
        content = RokuContent.from_dict(
            {"channel_id": "12", "content_id": "1", "media_type": "series"}
        )
        assert content.media_type == "series"
        assert content.metadata == {}

    def test_missing_ids_rejected(self) -> None:
        with pytest.raises(ValueError):
            RokuContent.from_dict({"title": "No IDs"})

    def test_numeric_ids_are_stringified(self) -> None:
        content = RokuContent.from_dict({"channelId": 12, "contentId": 80100172})
        assert content.channel_id == "12"
        assert content.content_id == "80100172"


class TestToDict:
    def test_emits_camel_case(self) -> None:
        content = RokuContent(
            channel_id="44191",
            content_id="541",
            metadata={"resume_position_ticks": 600, "image_url": "http://x/i.jpg"},
        )
        data = content.to_dict()
        assert data["channelId"] == "44191"
        assert data["contentId"] == "541"
        assert data["metadata"] == {
            "resumePositionTicks": 600,
            "imageUrl": "http://x/i.jpg",
        }

    def test_from_dict_reads_to_dict_output(self) -> None:
        content = RokuContent(
            channel_id="13",
            content_id="B0DKTFF815",
            media_type="movie",
            title="Prime Video Content",
            channel_name="Prime Video",
            metadata={"original_url": "https://www.amazon.com/gp/video/detail/B0DKTFF815"},
        )
        assert RokuContent.from_dict(content.to_dict()) == content

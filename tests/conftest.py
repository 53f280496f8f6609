"""Shared fixtures for transcript-sync tests."""

from __future__ import annotations

import os
from datetime import timedelta

import pytest

# Keep a developer's local .env / TS_ overrides out of the test run.
for _key in [k for k in os.environ if k.startswith("TS_")]:
    del os.environ[_key]

from transcript_sync.config import get_settings  # noqa: E402
from transcript_sync.models import (  # noqa: E402
    Episode,
    Person,
    PlaybackPositionEvent,
    Subtitle,
    Transcript,
)


# ── Helpers ──────────────────────────────────────────────────

def sub(start_s: float, end_s: float, text: str = "", speaker: str = "") -> Subtitle:
    """Build a Subtitle from second offsets."""
    return Subtitle(
        start=timedelta(seconds=start_s),
        end=timedelta(seconds=end_s),
        text=text,
        speaker=speaker,
    )


def at(transcript: Transcript | None, seconds: float, episode: Episode | None = None) -> PlaybackPositionEvent:
    """Build a position event for *transcript* at *seconds*."""
    return PlaybackPositionEvent(
        episode=episode,
        transcript=transcript,
        position=timedelta(seconds=seconds),
    )


# ── Fixtures ─────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reset the ``get_settings`` cache around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def bob_transcript() -> Transcript:
    """Two back-to-back lines; only the first names its speaker in the text."""
    return Transcript(
        subtitles=[
            sub(0, 5, "Bob: hi"),
            sub(5, 10, "next line"),
        ]
    )


@pytest.fixture()
def gapped_transcript() -> Transcript:
    """Four lines with gaps between the second/third and third/fourth."""
    return Transcript(
        subtitles=[
            sub(0, 2, "Alice: welcome to the show"),
            sub(2, 4, "thanks for having me", speaker="Guest"),
            sub(6, 8, "Alice: so tell us"),
            sub(10, 12, "well it started like this"),
        ]
    )


@pytest.fixture()
def episode(gapped_transcript: Transcript) -> Episode:
    return Episode(
        guid="ep-1",
        podcast_guid="pod-1",
        title="Pilot",
        transcript=gapped_transcript,
        persons=[
            Person(name="Alice Jones", role="host"),
            Person(name="Bob Smith", role="guest"),
        ],
    )

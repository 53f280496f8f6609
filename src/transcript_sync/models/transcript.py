"""
Transcript data models for transcript-sync.

Defines the Pydantic models for Subtitle (one timed transcript line with
an optional speaker) and Transcript (the ordered, non-overlapping line
sequence of an episode), plus the transcript load states and the
search/filter events exchanged with the filter host.
"""

from __future__ import annotations

import enum
from datetime import timedelta

from pydantic import BaseModel, Field, model_validator


class Subtitle(BaseModel):
    """A single timed line of a transcript.

    Attributes:
        index: Ordinal from the source document (e.g. SRT cue number).
        start: Offset from episode start at which the line begins.
        end: Offset from episode start at which the line ends (exclusive).
        text: Display text of the line.
        speaker: Speaker label; empty means "infer from text".
    """

    model_config = {"from_attributes": True, "frozen": True}

    index: int | None = Field(default=None, ge=0, description="Source ordinal.")
    start: timedelta = Field(..., description="Line start offset.")
    end: timedelta = Field(..., description="Line end offset (exclusive).")
    text: str = Field(default="", description="Display text of the line.")
    speaker: str = Field(default="", max_length=255, description="Speaker label.")

    @model_validator(mode="after")
    def _check_interval(self) -> Subtitle:
        """Reject negative offsets and empty or inverted intervals."""
        if self.start < timedelta(0):
            raise ValueError("start must not be negative")
        if self.start >= self.end:
            raise ValueError(f"start ({self.start}) must be before end ({self.end})")
        return self

    def contains(self, position: timedelta) -> bool:
        """Return ``True`` if *position* falls within ``[start, end)``."""
        return self.start <= position < self.end


class Transcript(BaseModel):
    """An episode transcript: subtitles sorted by start, never overlapping.

    Gaps between consecutive lines are allowed.

    Attributes:
        subtitles: Ordered transcript lines.
        available: Whether the source actually provided a transcript.
        source_url: Where the transcript was loaded from.
    """

    model_config = {"from_attributes": True, "frozen": True}

    subtitles: tuple[Subtitle, ...] = Field(default=(), description="Ordered lines.")
    available: bool = Field(default=True, description="Whether a transcript exists.")
    source_url: str | None = Field(default=None, description="Transcript source URL.")

    @model_validator(mode="after")
    def _check_ordering(self) -> Transcript:
        """Ensure lines are sorted ascending and do not overlap."""
        for previous, current in zip(self.subtitles, self.subtitles[1:]):
            if current.start < previous.start:
                raise ValueError(
                    f"subtitles are not sorted: {current.start} follows {previous.start}"
                )
            if current.start < previous.end:
                raise ValueError(
                    f"subtitles overlap: line at {current.start} starts before {previous.end}"
                )
        return self

    @property
    def is_empty(self) -> bool:
        """``True`` when there are no lines to track."""
        return not self.subtitles

    def filtered(self, search: str) -> Transcript:
        """Return a transcript holding only lines whose text contains *search*.

        Matching is case-insensitive. An empty search returns ``self``.
        """
        needle = search.strip().lower()
        if not needle:
            return self
        return Transcript(
            subtitles=[s for s in self.subtitles if needle in s.text.lower()],
            available=self.available,
            source_url=self.source_url,
        )


class TranscriptStatus(str, enum.Enum):
    """Load status of the now-playing transcript."""

    LOADING = "loading"
    UNAVAILABLE = "unavailable"
    LOADED = "loaded"


class TranscriptState(BaseModel):
    """Snapshot of the now-playing transcript as published by the player.

    Attributes:
        status: Current load status.
        transcript: The loaded transcript (only with ``LOADED``).
    """

    model_config = {"from_attributes": True}

    status: TranscriptStatus = Field(..., description="Current load status.")
    transcript: Transcript | None = Field(default=None, description="Loaded transcript.")

    @property
    def has_transcript(self) -> bool:
        """``True`` when a usable transcript is loaded."""
        return (
            self.status == TranscriptStatus.LOADED
            and self.transcript is not None
            and self.transcript.available
        )


class TranscriptFilterEvent(BaseModel):
    """Ask the filter host to show only lines matching *search*."""

    search: str = Field(..., min_length=1, description="Search text.")


class TranscriptClearEvent(BaseModel):
    """Ask the filter host to show the full transcript again."""

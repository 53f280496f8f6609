"""
Playback and scroll data models for transcript-sync.

Defines the events pushed by the audio engine (PlaybackPositionEvent)
and the scroll host (ScrollOffsetEvent), and the UpdateCommand the
synchronizer hands to the rendering layer, optionally carrying a
ScrollTarget.
"""

from __future__ import annotations

import enum
from datetime import timedelta

from pydantic import BaseModel, Field, field_validator

from transcript_sync.models.episode import Episode
from transcript_sync.models.transcript import Transcript


class PlaybackPositionEvent(BaseModel):
    """A position snapshot emitted by the audio engine while playing.

    Attributes:
        episode: The episode being played.
        transcript: The episode's transcript, if loaded.
        position: Offset from episode start.
        length: Episode duration, when known.
        buffering: Whether the engine is currently buffering.
    """

    model_config = {"from_attributes": True}

    episode: Episode | None = Field(default=None, description="Episode being played.")
    transcript: Transcript | None = Field(default=None, description="Episode transcript.")
    position: timedelta = Field(..., description="Offset from episode start.")
    length: timedelta | None = Field(default=None, description="Episode duration.")
    buffering: bool = Field(default=False, description="Engine is buffering.")

    @field_validator("position")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("position must not be negative")
        return value

    @property
    def resolved_transcript(self) -> Transcript | None:
        """The explicit transcript, falling back to the episode's."""
        if self.transcript is not None:
            return self.transcript
        if self.episode is not None:
            return self.episode.transcript
        return None


class ScrollOffsetEvent(BaseModel):
    """A scroll-offset change reported by the scroll host.

    Attributes:
        delta: Offset change in logical pixels.
        programmatic: ``True`` when the host scrolled on our behalf.
    """

    delta: float = Field(default=0.0, description="Offset change in pixels.")
    programmatic: bool = Field(default=False, description="Scroll issued by the host itself.")


class ScrollMode(str, enum.Enum):
    """How the scroll host should bring a line into view."""

    JUMP = "jump"
    ANIMATE = "animate"


class ScrollTarget(BaseModel):
    """Where, and how, the scroll host should move the transcript list.

    Attributes:
        index: Line index to bring into view.
        mode: Jump immediately or animate.
        duration: Animation duration (zero for ``JUMP``).
    """

    model_config = {"frozen": True}

    index: int = Field(..., ge=0, description="Line index to bring into view.")
    mode: ScrollMode = Field(..., description="Jump or animate.")
    duration: timedelta = Field(default=timedelta(0), description="Animation duration.")


class UpdateCommand(BaseModel):
    """What the rendering layer must apply after a position update.

    Attributes:
        index: Index of the active line.
        position: Start offset of the active line (highlight key).
        speaker: Active speaker label (may be empty).
        scroll_target: Scroll to issue, when auto-scroll is on.
    """

    model_config = {"frozen": True}

    index: int = Field(..., ge=0, description="Index of the active line.")
    position: timedelta = Field(..., description="Start offset of the active line.")
    speaker: str = Field(default="", description="Active speaker label.")
    scroll_target: ScrollTarget | None = Field(default=None, description="Scroll to issue.")

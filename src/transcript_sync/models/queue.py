"""
Playback-queue event and state models for transcript-sync.

Events describe edits to the "up next" queue (add, remove, move, clear);
states describe the now-playing episode plus the pending queue as shown
by the queue tab.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from transcript_sync.models.episode import Episode


class QueueEvent(BaseModel):
    """Base class for queue edits.

    Attributes:
        episode: Episode the edit applies to.
        position: Optional queue position for the edit.
    """

    model_config = {"from_attributes": True}

    episode: Episode | None = Field(default=None, description="Episode the edit applies to.")
    position: int | None = Field(default=None, ge=0, description="Queue position.")


class QueueAddEvent(QueueEvent):
    """Add *episode* to the queue, at *position* or at the end."""

    episode: Episode = Field(..., description="Episode to add.")


class QueueRemoveEvent(QueueEvent):
    """Remove *episode* from the queue."""

    episode: Episode = Field(..., description="Episode to remove.")


class QueueMoveEvent(QueueEvent):
    """Move *episode* from ``old_index`` to ``new_index``."""

    episode: Episode = Field(..., description="Episode to move.")
    old_index: int = Field(..., ge=0, description="Current queue index.")
    new_index: int = Field(..., ge=0, description="Target queue index.")


class QueueClearEvent(QueueEvent):
    """Empty the queue."""


class QueueState(BaseModel):
    """Now-playing episode and the episodes queued after it.

    Attributes:
        playing: Episode currently playing.
        queue: Episodes queued to play next, in order.
    """

    model_config = {"from_attributes": True}

    playing: Episode | None = Field(default=None, description="Episode currently playing.")
    queue: list[Episode] = Field(default_factory=list, description="Queued episodes.")


class QueueListState(QueueState):
    """A queue with something playing or pending."""


def _placeholder_episode() -> Episode:
    return Episode(guid="", podcast_guid="", title="")


class QueueEmptyState(QueueState):
    """Nothing playing and nothing queued."""

    playing: Episode | None = Field(
        default_factory=_placeholder_episode,
        description="Blank placeholder episode.",
    )

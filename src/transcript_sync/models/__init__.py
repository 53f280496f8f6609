"""
Shared Pydantic data models for transcript-sync.

This package contains the transcript, episode, playback/scroll and
playback-queue models exchanged between the synchronizer and its
external collaborators.
"""

from transcript_sync.models.episode import Episode, Person
from transcript_sync.models.playback import (
    PlaybackPositionEvent,
    ScrollMode,
    ScrollOffsetEvent,
    ScrollTarget,
    UpdateCommand,
)
from transcript_sync.models.queue import (
    QueueAddEvent,
    QueueClearEvent,
    QueueEmptyState,
    QueueEvent,
    QueueListState,
    QueueMoveEvent,
    QueueRemoveEvent,
    QueueState,
)
from transcript_sync.models.transcript import (
    Subtitle,
    Transcript,
    TranscriptClearEvent,
    TranscriptFilterEvent,
    TranscriptState,
    TranscriptStatus,
)

__all__ = [
    "Episode",
    "Person",
    "PlaybackPositionEvent",
    "QueueAddEvent",
    "QueueClearEvent",
    "QueueEmptyState",
    "QueueEvent",
    "QueueListState",
    "QueueMoveEvent",
    "QueueRemoveEvent",
    "QueueState",
    "ScrollMode",
    "ScrollOffsetEvent",
    "ScrollTarget",
    "Subtitle",
    "Transcript",
    "TranscriptClearEvent",
    "TranscriptFilterEvent",
    "TranscriptState",
    "TranscriptStatus",
    "UpdateCommand",
]

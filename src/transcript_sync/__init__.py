"""
transcript-sync: playback-synchronized transcript tracking.

Keeps a podcast transcript view in step with audio playback: resolves
the active line and speaker for each position update, decides when to
auto-scroll, and carries the episode, transcript and playback-queue
models shared with the rest of the player.
"""

from transcript_sync.config import Settings, get_settings
from transcript_sync.subscription import TranscriptSubscription
from transcript_sync.synchronizer import (
    LookupPath,
    SyncPhase,
    SynchronizerState,
    TranscriptSynchronizer,
    resolve_index,
)

__all__ = [
    "LookupPath",
    "Settings",
    "SyncPhase",
    "SynchronizerState",
    "TranscriptSubscription",
    "TranscriptSynchronizer",
    "get_settings",
    "resolve_index",
]

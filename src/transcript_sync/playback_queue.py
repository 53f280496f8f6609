"""
"Up next" playback queue for transcript-sync.

Applies queue events (add, remove, move, clear) to an in-memory queue
and publishes the resulting queue state for the queue tab.
"""

from __future__ import annotations

import structlog

from transcript_sync.models.episode import Episode
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

logger = structlog.get_logger()


class PlaybackQueue:
    """In-memory "up next" queue.

    Args:
        playing: Episode currently playing.
        queue: Initial queued episodes, in play order.
    """

    def __init__(
        self,
        playing: Episode | None = None,
        queue: list[Episode] | None = None,
    ) -> None:
        self.playing = playing
        self._queue: list[Episode] = list(queue or [])

    @property
    def state(self) -> QueueState:
        """Current queue as a state snapshot."""
        if self.playing is None and not self._queue:
            return QueueEmptyState()
        return QueueListState(playing=self.playing, queue=list(self._queue))

    def apply(self, event: QueueEvent) -> QueueState:
        """Apply *event* and return the new state.

        Raises:
            IndexError: If a move refers to a position outside the queue.
            TypeError: If *event* is not a known queue event.
        """
        if isinstance(event, QueueAddEvent):
            self._add(event.episode, event.position)
        elif isinstance(event, QueueRemoveEvent):
            self._remove(event.episode)
        elif isinstance(event, QueueMoveEvent):
            self._move(event.old_index, event.new_index)
        elif isinstance(event, QueueClearEvent):
            self._queue.clear()
            logger.info("queue_cleared")
        else:
            raise TypeError(f"Unsupported queue event {type(event).__name__}")
        return self.state

    # ── internal ──

    def _add(self, episode: Episode, position: int | None) -> None:
        # Re-adding an episode moves it rather than duplicating it.
        self._queue = [e for e in self._queue if e.guid != episode.guid]
        if position is None or position >= len(self._queue):
            self._queue.append(episode)
        else:
            self._queue.insert(position, episode)
        logger.debug("queue_episode_added", guid=episode.guid, size=len(self._queue))

    def _remove(self, episode: Episode) -> None:
        before = len(self._queue)
        self._queue = [e for e in self._queue if e.guid != episode.guid]
        if len(self._queue) == before:
            logger.debug("queue_episode_not_found", guid=episode.guid)

    def _move(self, old_index: int, new_index: int) -> None:
        size = len(self._queue)
        if old_index >= size or new_index >= size:
            raise IndexError(
                f"Cannot move {old_index} -> {new_index} in a queue of {size}"
            )
        episode = self._queue.pop(old_index)
        self._queue.insert(new_index, episode)

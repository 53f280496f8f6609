"""
Stream subscription for one transcript view in transcript-sync.

Consumes the audio engine's position stream and the scroll host's
offset stream as asyncio tasks, feeds both into a
:class:`TranscriptSynchronizer`, and hands every resulting
:class:`UpdateCommand` to the view's sink. Cancelling the subscription
releases both streams; no command is delivered afterwards.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterable, Awaitable, Callable
from typing import Any

import structlog

from transcript_sync.models.playback import (
    PlaybackPositionEvent,
    ScrollOffsetEvent,
    UpdateCommand,
)
from transcript_sync.synchronizer import TranscriptSynchronizer

logger = structlog.get_logger()

CommandSink = Callable[[UpdateCommand], Awaitable[None] | None]


class TranscriptSubscription:
    """Owns the stream subscriptions of a single transcript view.

    Args:
        synchronizer: The view's synchronizer (exclusively owned).
        positions: Position events from the audio engine.
        on_command: Called with every command; may be sync or async.
        scroll_offsets: Optional scroll-offset events from the scroll host.
        name: Label used for task names and log context.
    """

    def __init__(
        self,
        synchronizer: TranscriptSynchronizer,
        positions: AsyncIterable[PlaybackPositionEvent],
        on_command: CommandSink,
        *,
        scroll_offsets: AsyncIterable[ScrollOffsetEvent] | None = None,
        name: str = "transcript-view",
    ) -> None:
        self._sync = synchronizer
        self._positions = positions
        self._scroll_offsets = scroll_offsets
        self._on_command = on_command
        self._name = name
        self._stop_event = asyncio.Event()
        self._tasks: list[asyncio.Task[None]] = []
        self._log = logger.bind(view=name)

    # ── Public API ────────────────────────────────────────────

    async def start(self) -> None:
        """Spawn the consumer tasks. A second call is a no-op."""
        if self.active:
            self._log.info("subscription_already_running")
            return

        self._stop_event.clear()
        self._tasks = [
            asyncio.create_task(self._consume_positions(), name=f"{self._name}-positions"),
        ]
        if self._scroll_offsets is not None:
            self._tasks.append(
                asyncio.create_task(
                    self._consume_scroll(self._scroll_offsets), name=f"{self._name}-scroll"
                ),
            )
        self._log.info("subscription_started", streams=len(self._tasks))

    async def cancel(self) -> None:
        """Release both streams and reset the synchronizer."""
        self._stop_event.set()
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            if not task.done():
                task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._sync.reset()
        self._log.info("subscription_cancelled")

    @property
    def active(self) -> bool:
        """``True`` while any consumer task is still running."""
        return any(not t.done() for t in self._tasks)

    async def wait(self) -> None:
        """Wait until both streams are exhausted (or cancelled)."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def __aenter__(self) -> TranscriptSubscription:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.cancel()

    # ── Internal ──────────────────────────────────────────────

    async def _consume_positions(self) -> None:
        """Feed position events to the synchronizer until stopped."""
        try:
            async for event in self._positions:
                if self._stop_event.is_set():
                    return
                command = self._sync.on_position_event(event)
                if command is not None:
                    await self._deliver(command)
        except asyncio.CancelledError:
            self._log.debug("position_stream_cancelled")
            raise
        except Exception:
            self._log.exception("position_stream_error")
        else:
            self._log.debug("position_stream_ended")

    async def _consume_scroll(self, offsets: AsyncIterable[ScrollOffsetEvent]) -> None:
        """Feed scroll-offset events to the synchronizer until stopped."""
        try:
            async for event in offsets:
                if self._stop_event.is_set():
                    return
                self._sync.on_scroll_offset(event)
        except asyncio.CancelledError:
            self._log.debug("scroll_stream_cancelled")
            raise
        except Exception:
            self._log.exception("scroll_stream_error")

    async def _deliver(self, command: UpdateCommand) -> None:
        """Hand *command* to the sink; sink failures are logged, not raised."""
        if self._stop_event.is_set():
            return
        try:
            result = self._on_command(command)
            if inspect.isawaitable(result):
                await result
        except Exception:
            self._log.exception("command_sink_error", index=command.index)

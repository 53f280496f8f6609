"""
Tests for the transcript view subscription.

Validates start/cancel lifecycle, command delivery to sync and async
sinks, scroll-offset handling, and that failures in a stream or sink
are contained.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from datetime import timedelta

import pytest

from conftest import at

from transcript_sync.models import (
    PlaybackPositionEvent,
    ScrollMode,
    ScrollOffsetEvent,
    Transcript,
    UpdateCommand,
)
from transcript_sync.subscription import TranscriptSubscription
from transcript_sync.synchronizer import SyncPhase, TranscriptSynchronizer


# ── Helpers ──────────────────────────────────────────────────

async def _replay(events: list) -> AsyncIterator:
    for event in events:
        yield event


async def _drain(queue: asyncio.Queue) -> AsyncIterator:
    while True:
        yield await queue.get()


async def _settle() -> None:
    await asyncio.sleep(0.02)


# ── TestDelivery ─────────────────────────────────────────────

class TestDelivery:
    @pytest.mark.asyncio
    async def test_commands_delivered_in_order(self, gapped_transcript: Transcript) -> None:
        received: list[UpdateCommand] = []
        positions = [at(gapped_transcript, s) for s in (0.5, 1.0, 2.5, 5.0, 6.5)]
        sub = TranscriptSubscription(
            TranscriptSynchronizer(), _replay(positions), received.append
        )

        await sub.start()
        await sub.wait()

        assert [c.index for c in received] == [0, 1, 2]
        assert received[0].scroll_target is not None
        assert received[0].scroll_target.mode is ScrollMode.JUMP

    @pytest.mark.asyncio
    async def test_async_sink(self, bob_transcript: Transcript) -> None:
        received: list[UpdateCommand] = []

        async def _sink(command: UpdateCommand) -> None:
            await asyncio.sleep(0)
            received.append(command)

        sub = TranscriptSubscription(
            TranscriptSynchronizer(),
            _replay([at(bob_transcript, 0), at(bob_transcript, 6)]),
            _sink,
        )
        await sub.start()
        await sub.wait()

        assert [c.speaker for c in received] == ["Bob", "Bob"]

    @pytest.mark.asyncio
    async def test_sink_error_does_not_stop_stream(self, bob_transcript: Transcript) -> None:
        received: list[UpdateCommand] = []

        def _flaky(command: UpdateCommand) -> None:
            received.append(command)
            if len(received) == 1:
                raise RuntimeError("render failed")

        sub = TranscriptSubscription(
            TranscriptSynchronizer(),
            _replay([at(bob_transcript, 0), at(bob_transcript, 6)]),
            _flaky,
        )
        await sub.start()
        await sub.wait()

        assert len(received) == 2

    @pytest.mark.asyncio
    async def test_stream_error_is_contained(self, bob_transcript: Transcript) -> None:
        received: list[UpdateCommand] = []

        async def _broken() -> AsyncIterator[PlaybackPositionEvent]:
            yield at(bob_transcript, 0)
            raise RuntimeError("engine went away")

        sub = TranscriptSubscription(TranscriptSynchronizer(), _broken(), received.append)
        await sub.start()
        await sub.wait()

        assert len(received) == 1
        assert not sub.active


# ── TestLifecycle ────────────────────────────────────────────

class TestLifecycle:
    @pytest.mark.asyncio
    async def test_cancel_stops_delivery(self, gapped_transcript: Transcript) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        received: list[UpdateCommand] = []
        sync = TranscriptSynchronizer()
        sub = TranscriptSubscription(sync, _drain(queue), received.append)

        await sub.start()
        queue.put_nowait(at(gapped_transcript, 0.5))
        await _settle()
        assert len(received) == 1

        await sub.cancel()
        queue.put_nowait(at(gapped_transcript, 2.5))
        await _settle()

        assert len(received) == 1
        assert not sub.active
        assert sync.state.phase is SyncPhase.IDLE

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        sub = TranscriptSubscription(TranscriptSynchronizer(), _drain(queue), lambda c: None)

        await sub.start()
        tasks = list(sub._tasks)
        await sub.start()

        assert sub._tasks == tasks
        await sub.cancel()

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        scroll: asyncio.Queue = asyncio.Queue()
        async with TranscriptSubscription(
            TranscriptSynchronizer(),
            _drain(queue),
            lambda c: None,
            scroll_offsets=_drain(scroll),
        ) as sub:
            assert sub.active
            assert len(sub._tasks) == 2
        assert not sub.active


# ── TestScrollStream ─────────────────────────────────────────

class TestScrollStream:
    @pytest.mark.asyncio
    async def test_user_scroll_turns_off_auto_scroll(self, gapped_transcript: Transcript) -> None:
        positions: asyncio.Queue = asyncio.Queue()
        offsets: asyncio.Queue = asyncio.Queue()
        received: list[UpdateCommand] = []
        sync = TranscriptSynchronizer()

        async with TranscriptSubscription(
            sync,
            _drain(positions),
            received.append,
            scroll_offsets=_drain(offsets),
        ):
            positions.put_nowait(at(gapped_transcript, 0.5))
            await _settle()
            offsets.put_nowait(ScrollOffsetEvent(delta=-25.0))
            await _settle()
            assert sync.state.auto_scroll is False

            positions.put_nowait(at(gapped_transcript, 2.5))
            await _settle()

        assert [c.index for c in received] == [0, 1]
        assert received[0].scroll_target is not None
        assert received[1].scroll_target is None

    @pytest.mark.asyncio
    async def test_user_scroll_after_animation(self, gapped_transcript: Transcript) -> None:
        positions: asyncio.Queue = asyncio.Queue()
        offsets: asyncio.Queue = asyncio.Queue()
        received: list[UpdateCommand] = []
        sync = TranscriptSynchronizer(smooth_scroll=timedelta(milliseconds=50))

        async with TranscriptSubscription(
            sync,
            _drain(positions),
            received.append,
            scroll_offsets=_drain(offsets),
        ):
            positions.put_nowait(at(gapped_transcript, 0.5))
            positions.put_nowait(at(gapped_transcript, 2.5))
            await _settle()
            assert received[-1].scroll_target is not None
            assert received[-1].scroll_target.mode is ScrollMode.ANIMATE

            await asyncio.sleep(0.1)
            offsets.put_nowait(ScrollOffsetEvent(delta=30.0))
            await _settle()
            assert sync.state.auto_scroll is False

            positions.put_nowait(at(gapped_transcript, 6.5))
            await _settle()

        assert received[-1].index == 2
        assert received[-1].scroll_target is None

    @pytest.mark.asyncio
    async def test_programmatic_offsets_keep_auto_scroll(self, gapped_transcript: Transcript) -> None:
        sync = TranscriptSynchronizer()
        sub = TranscriptSubscription(
            sync,
            _replay([at(gapped_transcript, 0.5)]),
            lambda c: None,
            scroll_offsets=_replay([ScrollOffsetEvent(delta=30.0, programmatic=True)]),
        )
        await sub.start()
        await sub.wait()

        assert sync.state.auto_scroll is True

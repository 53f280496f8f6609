"""
Transcript position synchronizer for transcript-sync.

Maps the audio engine's continuous stream of playback positions onto
discrete active-line transitions, keeps track of the current speaker,
and decides when the transcript view should auto-scroll.

Line lookup strategy (cheapest first):
  1. The current line still contains the position: nothing to do.
  2. The next line contains it: advance by one (linear playback).
  3. Otherwise scan every line for the first that contains it. When
     none does (the position sits in a gap), keep the current line.
"""

from __future__ import annotations

import enum
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import timedelta

import structlog

from transcript_sync import metrics
from transcript_sync.config import get_settings
from transcript_sync.models.playback import (
    PlaybackPositionEvent,
    ScrollMode,
    ScrollOffsetEvent,
    ScrollTarget,
    UpdateCommand,
)
from transcript_sync.models.transcript import (
    Subtitle,
    Transcript,
    TranscriptClearEvent,
    TranscriptFilterEvent,
    TranscriptState,
)
from transcript_sync.speaker import extract_speaker

logger = structlog.get_logger()


class SyncPhase(str, enum.Enum):
    """Lifecycle of a synchronizer."""

    IDLE = "idle"
    AWAITING_FIRST = "awaiting_first"
    TRACKING = "tracking"


class LookupPath(str, enum.Enum):
    """Which lookup tier resolved a position."""

    CURRENT = "current"
    ADJACENT = "adjacent"
    SCAN = "scan"
    GAP = "gap"


@dataclass
class SynchronizerState:
    """Mutable per-view tracking state.

    Attributes:
        phase: Lifecycle phase; ``AWAITING_FIRST`` until the first
            position event for the loaded transcript is processed.
        transcript: Transcript being tracked.
        index: Index of the active line.
        speaker: Active speaker label.
        auto_scroll: Whether scroll targets are emitted.
        auto_scroll_toggle_enabled: Whether the user may switch
            auto-scroll back on (off while a filter is applied).
        filter_active: A search filter is applied to the list.
        scroll_jumped: A ``JUMP`` target was already emitted for
            the loaded transcript.
        scroll_in_flight: An animated scroll we requested is running.
        scroll_deadline: Clock reading at which that animation is over,
            whether or not the host reports completion.
    """

    phase: SyncPhase = SyncPhase.IDLE
    transcript: Transcript | None = None
    index: int = 0
    speaker: str = ""
    auto_scroll: bool = True
    auto_scroll_toggle_enabled: bool = True
    filter_active: bool = False
    scroll_jumped: bool = False
    scroll_in_flight: bool = False
    scroll_deadline: float = 0.0


def resolve_index(
    subtitles: Sequence[Subtitle],
    position: timedelta,
    current: int,
) -> tuple[int, LookupPath]:
    """Return the index of the line containing *position*.

    Args:
        subtitles: Non-empty, sorted, non-overlapping lines.
        position: Playback offset.
        current: Index of the currently active line.

    Returns:
        ``(index, path)``. For ``LookupPath.GAP`` the index is *current*.
    """
    if subtitles[current].contains(position):
        return current, LookupPath.CURRENT

    following = current + 1
    if following < len(subtitles) and subtitles[following].contains(position):
        return following, LookupPath.ADJACENT

    for idx, subtitle in enumerate(subtitles):
        if subtitle.contains(position):
            return idx, LookupPath.SCAN

    return current, LookupPath.GAP


class TranscriptSynchronizer:
    """Track the active transcript line and speaker for one view.

    Feed it position events with :meth:`on_position_event`; apply the
    returned :class:`UpdateCommand` to the view. Scroll-host and
    filter-host signals go through :meth:`on_scroll_offset`,
    :meth:`on_scroll_complete`, :meth:`set_auto_scroll`,
    :meth:`apply_filter` and :meth:`clear_filter`.

    Args:
        smooth_scroll: Animated-scroll duration. Defaults to
            ``TS_SMOOTH_SCROLL_MS``.
        clock: Monotonic clock in seconds, used to expire animated scrolls.
    """

    def __init__(
        self,
        smooth_scroll: timedelta | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if smooth_scroll is None:
            smooth_scroll = timedelta(milliseconds=get_settings().smooth_scroll_ms)
        self._smooth_scroll = smooth_scroll
        self._clock = clock
        self._state = SynchronizerState()
        self._log = logger

    # ── Public API ────────────────────────────────────────────

    @property
    def state(self) -> SynchronizerState:
        """The live tracking state (read it, do not mutate it)."""
        return self._state

    @property
    def active_subtitle(self) -> Subtitle | None:
        """The active line, or ``None`` while idle."""
        transcript = self._state.transcript
        if transcript is None or transcript.is_empty:
            return None
        return transcript.subtitles[self._state.index]

    def load(self, transcript: Transcript, *, episode_guid: str | None = None) -> None:
        """Start tracking *transcript* from scratch.

        Keeps the user's auto-scroll choice and any applied filter.
        """
        state = self._state
        state.transcript = transcript
        state.phase = SyncPhase.AWAITING_FIRST
        state.index = 0
        state.speaker = ""
        state.scroll_jumped = False
        state.scroll_in_flight = False
        state.scroll_deadline = 0.0
        self._log = logger.bind(episode_guid=episode_guid) if episode_guid else logger
        self._log.debug("transcript_loaded", lines=len(transcript.subtitles))

    def reset(self) -> None:
        """Drop the tracked transcript and return to ``IDLE``."""
        state = self._state
        state.transcript = None
        state.phase = SyncPhase.IDLE
        state.index = 0
        state.speaker = ""
        state.scroll_jumped = False
        state.scroll_in_flight = False
        state.scroll_deadline = 0.0

    def on_transcript_state(self, transcript_state: TranscriptState) -> None:
        """Follow the player's transcript load state."""
        if not transcript_state.has_transcript:
            if self._state.phase is not SyncPhase.IDLE:
                self._log.debug("transcript_unavailable", status=transcript_state.status.value)
            self.reset()
            return
        if transcript_state.transcript is not self._state.transcript:
            self.load(transcript_state.transcript)

    def on_position_event(self, event: PlaybackPositionEvent) -> UpdateCommand | None:
        """Process one position update.

        Returns:
            The command to apply, or ``None`` when nothing changed.
        """
        transcript = event.resolved_transcript
        if transcript is None or not transcript.available or transcript.is_empty:
            return None

        state = self._state
        if transcript is not state.transcript:
            self.load(
                transcript,
                episode_guid=event.episode.guid if event.episode is not None else None,
            )

        subtitles = transcript.subtitles
        first = state.phase is SyncPhase.AWAITING_FIRST
        if first:
            state.phase = SyncPhase.TRACKING
            state.speaker = self._speaker_for(subtitles[0], state.speaker)

        index, path = resolve_index(subtitles, event.position, state.index)

        if path is LookupPath.GAP:
            metrics.GAP_MISSES.inc()
            self._log.debug(
                "transcript_gap",
                position_ms=int(event.position.total_seconds() * 1000),
                index=state.index,
            )

        if index != state.index:
            state.index = index
            state.speaker = self._speaker_for(subtitles[index], state.speaker)
            metrics.SUBTITLE_TRANSITIONS.labels(path=path.value).inc()
        elif not first:
            return None

        return self._command(transcript)

    def on_scroll_offset(self, event: ScrollOffsetEvent) -> bool:
        """Handle a scroll-offset change from the scroll host.

        A scroll the user made (not one we requested) switches
        auto-scroll off. An animated scroll we requested counts as over
        once its duration has elapsed, even without
        :meth:`on_scroll_complete`.

        Returns:
            ``True`` if this event switched auto-scroll off.
        """
        state = self._state
        if state.scroll_in_flight and self._clock() >= state.scroll_deadline:
            state.scroll_in_flight = False
        if event.programmatic or state.scroll_in_flight or not state.auto_scroll:
            return False
        state.auto_scroll = False
        metrics.AUTO_SCROLL_OVERRIDES.labels(reason="user_scroll").inc()
        self._log.info("auto_scroll_disabled", reason="user_scroll")
        return True

    def on_scroll_complete(self) -> None:
        """The scroll host finished an animated scroll we requested."""
        self._state.scroll_in_flight = False

    def set_auto_scroll(self, enabled: bool) -> UpdateCommand | None:
        """Apply the user's auto-scroll toggle.

        Ignored while a filter is applied. Switching auto-scroll on
        scrolls straight back to the active line.

        Returns:
            A command carrying that scroll, or ``None``.
        """
        state = self._state
        if not state.auto_scroll_toggle_enabled:
            self._log.debug("auto_scroll_toggle_locked", requested=enabled)
            return None

        was_enabled = state.auto_scroll
        state.auto_scroll = enabled
        if not enabled:
            if was_enabled:
                metrics.AUTO_SCROLL_OVERRIDES.labels(reason="toggle").inc()
            return None
        transcript = state.transcript
        if was_enabled or state.phase is not SyncPhase.TRACKING or transcript is None:
            return None
        self._log.info("auto_scroll_enabled", index=state.index)
        return self._command(transcript)

    def apply_filter(self, search: str) -> TranscriptFilterEvent | None:
        """Apply a search filter: auto-scroll goes off and is locked.

        Returns:
            The event to forward to the filter host, or ``None`` for an
            empty search.
        """
        if not search:
            return None
        state = self._state
        if state.auto_scroll:
            metrics.AUTO_SCROLL_OVERRIDES.labels(reason="filter").inc()
        state.filter_active = True
        state.auto_scroll = False
        state.auto_scroll_toggle_enabled = False
        self._log.info("transcript_filter_applied", search=search)
        return TranscriptFilterEvent(search=search)

    def clear_filter(self) -> TranscriptClearEvent:
        """Clear the search filter and unlock the auto-scroll toggle.

        Auto-scroll stays off until the user switches it back on.
        """
        state = self._state
        state.filter_active = False
        state.auto_scroll_toggle_enabled = True
        self._log.info("transcript_filter_cleared")
        return TranscriptClearEvent()

    # ── Internal ──────────────────────────────────────────────

    @staticmethod
    def _speaker_for(subtitle: Subtitle, current: str) -> str:
        """Explicit speaker first, then the text prefix, then *current*."""
        if subtitle.speaker:
            return subtitle.speaker
        inferred = extract_speaker(subtitle.text)
        if inferred is not None:
            return inferred
        return current

    def _command(self, transcript: Transcript) -> UpdateCommand:
        state = self._state
        subtitle = transcript.subtitles[state.index]
        target = self._scroll_target(state.index) if state.auto_scroll else None
        return UpdateCommand(
            index=state.index,
            position=subtitle.start,
            speaker=state.speaker,
            scroll_target=target,
        )

    def _scroll_target(self, index: int) -> ScrollTarget:
        state = self._state
        if not state.scroll_jumped:
            state.scroll_jumped = True
            metrics.SCROLL_COMMANDS.labels(mode=ScrollMode.JUMP.value).inc()
            return ScrollTarget(index=index, mode=ScrollMode.JUMP)
        state.scroll_in_flight = True
        state.scroll_deadline = self._clock() + self._smooth_scroll.total_seconds()
        metrics.SCROLL_COMMANDS.labels(mode=ScrollMode.ANIMATE.value).inc()
        return ScrollTarget(index=index, mode=ScrollMode.ANIMATE, duration=self._smooth_scroll)

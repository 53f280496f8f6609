"""
Line labels and tap-to-seek helpers for transcript-sync.

Small pure functions the rendering layer uses to label a transcript line
and to turn a tap on a line into a seek position.
"""

from __future__ import annotations

from datetime import timedelta

from transcript_sync.config import get_settings
from transcript_sync.models.transcript import Subtitle


def format_offset(offset: timedelta) -> str:
    """Format *offset* as ``hh:mm:ss`` (sub-second part dropped)."""
    total = int(offset.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def subtitle_heading(subtitle: Subtitle) -> str:
    """Return the heading shown above a line: start time, then speaker."""
    heading = format_offset(subtitle.start)
    if subtitle.speaker:
        return f"{heading} - {subtitle.speaker}"
    return heading


def seek_target(subtitle: Subtitle, margin: timedelta | None = None) -> float:
    """Return the position, in whole seconds, to seek to when a line is tapped.

    Args:
        subtitle: The tapped line.
        margin: Offset past the line start. Defaults to ``TS_SEEK_MARGIN_MS``.
    """
    if margin is None:
        margin = timedelta(milliseconds=get_settings().seek_margin_ms)
    return float(int((subtitle.start + margin).total_seconds()))

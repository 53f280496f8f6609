"""
Prometheus metrics for transcript-sync.

Shared counters describing how position updates are resolved to
transcript lines and how often auto-scroll is issued or overridden.
"""

from __future__ import annotations

from prometheus_client import Counter

SUBTITLE_TRANSITIONS = Counter(
    "transcript_subtitle_transitions_total",
    "Active-line changes, by the lookup path that resolved them.",
    ["path"],
)
GAP_MISSES = Counter(
    "transcript_gap_misses_total",
    "Position updates that fell outside every subtitle range.",
)
SCROLL_COMMANDS = Counter(
    "transcript_scroll_commands_total",
    "Scroll targets emitted to the scroll host.",
    ["mode"],
)
AUTO_SCROLL_OVERRIDES = Counter(
    "transcript_auto_scroll_overrides_total",
    "Times auto-scroll was switched off.",
    ["reason"],
)

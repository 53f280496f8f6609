"""
Speaker inference for transcript-sync.

Many transcripts (SRT in particular) carry no speaker metadata and
instead prefix each line with ``Name:``. This module extracts that
prefix and matches the result against an episode's credited persons.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from transcript_sync.models.episode import Person

SPEAKER_PATTERN = re.compile(r"^(?P<speaker>[A-Za-z0-9\s]+):")


def extract_speaker(text: str) -> str | None:
    """Return the speaker named at the start of *text*, if any.

    The line must start with one or more letters, digits or whitespace
    characters followed by a colon; the span before the colon is the
    speaker.

    Args:
        text: Transcript line text.

    Returns:
        The speaker name, or ``None`` when the line has no such prefix.
    """
    match = SPEAKER_PATTERN.match(text)
    if match is None:
        return None
    return match.group("speaker")


def match_person(speaker: str | None, persons: Iterable[Person]) -> Person | None:
    """Return the first person whose name starts with *speaker*.

    Comparison is case-insensitive, so ``"bob"`` selects ``"Bob Smith"``.
    An empty speaker never matches.
    """
    if not speaker:
        return None
    needle = speaker.lower()
    for person in persons:
        if person.name.lower().startswith(needle):
            return person
    return None

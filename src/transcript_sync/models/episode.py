"""
Episode and person data models for transcript-sync.

An Episode owns its (lazily loaded) Transcript and the list of persons
credited on it, which the transcript view matches against the active
speaker label.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from transcript_sync.models.transcript import Transcript


class Person(BaseModel):
    """A person credited on an episode (host, guest, ...).

    Attributes:
        name: Display name.
        role: Role on the episode (e.g. ``host``).
        group: Role group (e.g. ``cast``).
        image: Avatar URL.
        link: Profile URL.
    """

    model_config = {"from_attributes": True}

    name: str = Field(..., description="Display name.")
    role: str = Field(default="host", description="Role on the episode.")
    group: str = Field(default="cast", description="Role group.")
    image: str | None = Field(default=None, description="Avatar URL.")
    link: str | None = Field(default=None, description="Profile URL.")


class Episode(BaseModel):
    """A podcast episode as far as the transcript view is concerned.

    Attributes:
        guid: Episode GUID.
        podcast_guid: Parent podcast GUID.
        title: Episode title.
        transcript_url: Where the transcript can be fetched from.
        transcript: Loaded transcript, if any.
        persons: Persons credited on this episode.
    """

    model_config = {"from_attributes": True}

    guid: str = Field(..., description="Episode GUID.")
    podcast_guid: str = Field(default="", description="Parent podcast GUID.")
    title: str = Field(default="", description="Episode title.")
    transcript_url: str | None = Field(default=None, description="Transcript URL.")
    transcript: Transcript | None = Field(default=None, description="Loaded transcript.")
    persons: list[Person] = Field(default_factory=list, description="Credited persons.")

    @property
    def has_transcripts(self) -> bool:
        """``True`` when a transcript is loaded or can be fetched."""
        return self.transcript_url is not None or (
            self.transcript is not None and self.transcript.available
        )

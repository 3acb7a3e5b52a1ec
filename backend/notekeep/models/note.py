"""
NoteKeep — Note Domain Models
==============================

What:  The persisted record types: a single Note and the whole NoteCollection.
How:   Pydantic models, validated when the state file is loaded and dumped
       back to JSON on every save.
Who:   Used by NoteStore for every operation and by StateFile for (de)serialization.

Persisted layout (notes.json):
    {
      "lastId": 2,
      "notes": [
        {"id": 1, "title": "A", "content": "x",
         "created": "2024-01-15T12:00:00Z", "changed": "2024-01-15T12:05:00Z"},
        ...
      ]
    }

    lastId is the highest id ever assigned. It never decreases, so ids of
    deleted notes are never handed out again.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(BaseModel):
    """
    A single note.

    Invariants (maintained by NoteStore, not by this model):
        - id is unique and immutable
        - title is unique across the collection (exact, case-sensitive)
        - title and content are never empty
        - changed >= created
    """

    id: int = Field(gt=0)
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    # Offset required: touch() compares against the aware utc_now()
    created: AwareDatetime
    changed: AwareDatetime

    def touch(self, now: Optional[datetime] = None) -> None:
        """Refresh `changed`, never letting it fall behind `created`."""
        now = now or utc_now()
        self.changed = max(now, self.created)


class NoteCollection(BaseModel):
    """The full state: id counter plus notes in insertion order."""

    model_config = ConfigDict(populate_by_name=True)

    last_id: int = Field(default=0, ge=0, alias="lastId")
    notes: List[Note] = Field(default_factory=list)

    def find_by_id(self, note_id: int) -> Optional[Note]:
        return next((note for note in self.notes if note.id == note_id), None)

    def find_by_title(self, title: str) -> Optional[Note]:
        return next((note for note in self.notes if note.title == title), None)

    def title_taken(self, title: str, exclude_id: Optional[int] = None) -> bool:
        return any(
            note.title == title and note.id != exclude_id for note in self.notes
        )

    def to_document(self) -> dict:
        """JSON-ready dict using the persisted key names."""
        return self.model_dump(mode="json", by_alias=True)

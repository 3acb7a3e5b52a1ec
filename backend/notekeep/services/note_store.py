"""
NoteKeep — Note Store (Business Logic)
=======================================

What:  Owns the persisted note collection and enforces its invariants:
       unique titles, monotonic never-reused ids, non-empty fields.
How:   Every call loads the full collection, checks and mutates it, and
       (for mutations) saves it back, all under one asyncio.Lock.
Who:   Called by route handlers through the get_note_store() dependency.

Operation Flow (create/update/delete):
    ┌──────────┐    ┌──────────┐    ┌──────────────┐    ┌──────────┐
    │  acquire │───▶│   load   │───▶│ check+mutate │───▶│   save   │
    │   lock   │    │  (file)  │    │  (in memory) │    │  (file)  │
    └──────────┘    └──────────┘    └──────────────┘    └──────────┘

    A failed check raises before save, so the file is left untouched.

Known limitation:
    The lock only serializes callers inside one process. Two processes
    sharing the same state file can assign duplicate ids or titles.
"""

import asyncio
import logging
from typing import List, Optional

from notekeep.exceptions import (
    ConflictError,
    ErrorReason,
    NotFoundError,
    ValidationError,
)
from notekeep.models.note import Note, utc_now
from notekeep.services.state_file import StateFile

logger = logging.getLogger(__name__)


class NoteStore:
    """
    CRUD operations over the note collection.

    Responsibilities:
        - list_all() / get_by_id() / get_by_title(): reads, None when absent
        - create(): validation, title uniqueness, id assignment (lastId + 1)
        - update(): set-if-provided title/content, refreshes `changed`
        - delete(): removal; the id is never reused

    Returned notes are copies; mutating them does not affect the store.
    """

    def __init__(self, state_file: Optional[StateFile] = None):
        self.state_file = state_file or StateFile()
        self._lock = asyncio.Lock()

    async def list_all(self) -> List[Note]:
        """All notes in insertion order (possibly empty)."""
        async with self._lock:
            state = await self.state_file.load()
            return [note.model_copy() for note in state.notes]

    async def get_by_id(self, note_id: int) -> Optional[Note]:
        async with self._lock:
            state = await self.state_file.load()
            note = state.find_by_id(note_id)
            return note.model_copy() if note else None

    async def get_by_title(self, title: str) -> Optional[Note]:
        """Exact, case-sensitive title match."""
        async with self._lock:
            state = await self.state_file.load()
            note = state.find_by_title(title)
            return note.model_copy() if note else None

    async def create(self, title: Optional[str], content: Optional[str]) -> Note:
        """
        Create a note with the next id.

        Raises:
            ValidationError: title or content missing/empty (TITLE_OR_CONTENT_MISSING)
            ConflictError:   another note already has this title (TITLE_EXISTS)
            StorageError:    state file could not be read or written
        """
        if not title or not content:
            raise ValidationError(ErrorReason.TITLE_OR_CONTENT_MISSING)

        async with self._lock:
            state = await self.state_file.load()
            if state.title_taken(title):
                raise ConflictError(title)

            now = utc_now()
            note = Note(
                id=state.last_id + 1,
                title=title,
                content=content,
                created=now,
                changed=now,
            )
            state.notes.append(note)
            state.last_id = note.id
            await self.state_file.save(state)

        logger.info("Note %d created", note.id)
        return note.model_copy()

    async def update(
        self,
        note_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Note:
        """
        Apply whichever of title/content is provided and refresh `changed`.

        Re-submitting the note's own title is not a conflict.

        Raises:
            ValidationError: neither title nor content given (NOTHING_TO_UPDATE)
            NotFoundError:   no note with this id
            ConflictError:   the new title belongs to another note
            StorageError:    state file could not be read or written
        """
        if not title and not content:
            raise ValidationError(ErrorReason.NOTHING_TO_UPDATE)

        async with self._lock:
            state = await self.state_file.load()
            note = state.find_by_id(note_id)
            if note is None:
                raise NotFoundError(note_id)

            if title and title != note.title:
                if state.title_taken(title, exclude_id=note_id):
                    raise ConflictError(title, context={"note_id": note_id})
                note.title = title
            if content:
                note.content = content

            note.touch()
            await self.state_file.save(state)

        logger.info("Note %d updated", note_id)
        return note.model_copy()

    async def delete(self, note_id: int) -> None:
        """
        Remove a note. lastId is left as is.

        Raises:
            NotFoundError: no note with this id
            StorageError:  state file could not be read or written
        """
        async with self._lock:
            state = await self.state_file.load()
            note = state.find_by_id(note_id)
            if note is None:
                raise NotFoundError(note_id)

            state.notes.remove(note)
            await self.state_file.save(state)

        logger.info("Note %d deleted", note_id)


# ── Process-wide Instance ─────────────────────────────────────────────────
_note_store: Optional[NoteStore] = None


def get_note_store() -> NoteStore:
    """
    FastAPI dependency returning the process-wide NoteStore.

    Created on first access so that settings (NOTES_FILE) are read after
    the environment is prepared. Tests replace it via app.dependency_overrides.
    """
    global _note_store
    if _note_store is None:
        _note_store = NoteStore()
        logger.info("NoteStore initialized with state file %s", _note_store.state_file.path)
    return _note_store

"""
NoteKeep — State File (Persistence Primitive)
==============================================

What:  Loads and saves the complete note collection as one JSON document.
How:   Async file I/O via aiofiles. Saves are full rewrites: the document is
       written to a temporary sibling file which then replaces the target, so
       readers never see a half-written record.
Who:   Owned by NoteStore; nothing else touches the file.
When:  Once per store operation (load), plus once per mutation (save).

Lifecycle of the file:
    1. First load with no file → default state {"lastId": 0, "notes": []} is written
    2. Every mutation → whole document rewritten (notes.json.tmp → notes.json)
    3. Unreadable or malformed document → StorageError (never silently reset)
"""

import json
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from notekeep.config import settings
from notekeep.exceptions import ErrorReason, StorageError
from notekeep.models.note import NoteCollection

logger = logging.getLogger(__name__)


class StateFile:
    """
    Reads and writes the JSON state document at a fixed path.

    Not synchronized: callers must serialize load → mutate → save
    themselves (NoteStore holds a lock around every operation). Use one
    StateFile (and one NoteStore) per path per process; separate instances
    write through separate temp files but do not share a lock.
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Args:
            path: Override the state file location (used in tests).
                  If None, uses settings.notes_path.
        """
        self.path = Path(path) if path is not None else settings.notes_path
        self._tmp_path = self.path.with_name(
            f".{self.path.name}.tmp.{os.getpid()}.{uuid.uuid4().hex[:8]}"
        )

    async def load(self) -> NoteCollection:
        """
        Read the full collection, creating the file on first access.

        Raises:
            StorageError: The file exists but cannot be read or is not a valid
                          collection document.
        """
        if not await aiofiles.os.path.exists(self.path):
            logger.info("State file %s not found, initializing empty collection", self.path)
            state = NoteCollection()
            await self.save(state)
            return state

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            logger.error("Failed to read state file %s: %s", self.path, str(e))
            raise StorageError(
                message="Could not read note storage",
                reason=ErrorReason.STATE_READ_FAILED,
                context={"path": str(self.path), "os_error": str(e)},
            ) from e

        try:
            return NoteCollection.model_validate(json.loads(raw))
        except ValueError as e:
            # Covers both json.JSONDecodeError and pydantic's ValidationError
            logger.error("State file %s is malformed: %s", self.path, str(e))
            raise StorageError(
                message="Note storage is corrupted",
                reason=ErrorReason.STATE_READ_FAILED,
                context={"path": str(self.path), "error": type(e).__name__},
            ) from e

    async def save(self, state: NoteCollection) -> None:
        """
        Rewrite the whole document.

        Raises:
            StorageError: Directory creation, write or rename failed
                          (disk full, permission denied, ...).
        """
        document = json.dumps(state.to_document(), indent=2) + "\n"
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(self._tmp_path, "w", encoding="utf-8") as f:
                await f.write(document)
            await aiofiles.os.replace(self._tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write state file %s: %s", self.path, str(e))
            raise StorageError(
                message="Could not save note storage",
                reason=ErrorReason.STATE_WRITE_FAILED,
                context={"path": str(self.path), "os_error": str(e)},
            ) from e

        logger.debug(
            "State file saved: %s (lastId=%d, %d notes)",
            self.path,
            state.last_id,
            len(state.notes),
        )

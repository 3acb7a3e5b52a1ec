"""
NoteKeep — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the note store and its HTTP adapter.
How:   Every store exception carries an ErrorKind (coarse category) and an
       ErrorReason (specific outcome code), a human-readable message and an
       optional context dict. Routes translate expected outcomes into
       RequestRejectedError; global handlers in main.py render the responses.

Exception Hierarchy:
    NoteKeepError (base)
    ├── ValidationError       kind=validation_error  (missing input)
    ├── ConflictError         kind=conflict          (title already taken)
    ├── NotFoundError         kind=not_found         (no note with that id)
    ├── StorageError          kind=io_error          (state file unreadable/unwritable → 500)
    └── RequestRejectedError  adapter-level outcome with an explicit HTTP status

The context dict is logged server-side and never returned to API consumers.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Coarse error category, safe to expose in API responses."""

    VALIDATION = "validation_error"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    IO = "io_error"


class ErrorReason(str, Enum):
    """Specific outcome code attached to each store error."""

    TITLE_OR_CONTENT_MISSING = "TITLE_OR_CONTENT_MISSING"
    NOTHING_TO_UPDATE = "NOTHING_TO_UPDATE"
    TITLE_EXISTS = "TITLE_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    STATE_READ_FAILED = "STATE_READ_FAILED"
    STATE_WRITE_FAILED = "STATE_WRITE_FAILED"


class NoteKeepError(Exception):
    """
    Base exception for all NoteKeep application errors.

    Attributes:
        message:  Human-readable description
        reason:   ErrorReason code, None for adapter-level errors
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        reason: Optional[ErrorReason] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.reason = reason
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteKeepError):
    """
    Raised when a required note field is missing or empty.

    Reasons:
        TITLE_OR_CONTENT_MISSING: create() without a title or without content
        NOTHING_TO_UPDATE:        update() with neither title nor content
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        reason: ErrorReason,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            if reason is ErrorReason.NOTHING_TO_UPDATE:
                message = "Provide a title or content to update"
            else:
                message = "Both title and content are required"
        super().__init__(message=message, reason=reason, context=context)


class ConflictError(NoteKeepError):
    """Raised when a title is already used by another note."""

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        title: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["title"] = title
        super().__init__(
            message=f"A note titled '{title}' already exists",
            reason=ErrorReason.TITLE_EXISTS,
            context=ctx,
        )
        self.title = title


class NotFoundError(NoteKeepError):
    """
    Raised when an operation targets a note id that does not exist.

    Lookups (get_by_id, get_by_title) return None instead; only update and
    delete treat a missing note as an error.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        note_id: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["note_id"] = note_id
        super().__init__(
            message=f"note with ID '{note_id}' was not found",
            reason=ErrorReason.NOT_FOUND,
            context=ctx,
        )
        self.note_id = note_id


class StorageError(NoteKeepError):
    """
    Raised when the state file cannot be read, parsed or written.

    Fatal for the current request: the HTTP layer answers 500 with a generic
    message and logs the path and OS error from the context.
    """

    kind = ErrorKind.IO

    def __init__(
        self,
        message: str = "Note storage is unavailable",
        reason: ErrorReason = ErrorReason.STATE_READ_FAILED,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, reason=reason, context=context)


class RequestRejectedError(NoteKeepError):
    """
    Raised by route handlers to answer with a specific status and a generic message.

    The same store outcome maps to different statuses per route (a missing
    note is 404 on GET but 409 on PUT/DELETE), so the mapping lives in the
    routes and this exception only carries the result.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code
        self.error = error

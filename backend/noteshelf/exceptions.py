"""
NoteShelf Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the failure modes of the note store.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the right HTTP status code.
Who:   Raised by storage and services; caught by global handlers.

Exception Hierarchy:
    NoteShelfError (base)
    ├── NotFoundError            → 404 Not Found
    ├── CorruptDataError         → 500 Internal Server Error
    │   ├── CorruptNoteError
    │   └── CorruptTemplateError
    ├── FileStorageError         → 500 Internal Server Error
    └── InvalidRequestBodyError  → 500 Internal Server Error

Clients only ever see two messages: "Note not found." for a lookup miss and
a generic failure message for everything else. The context dict is for the
server log.
"""

from typing import Any, Dict, Optional


class NoteShelfError(Exception):
    """
    Base exception for all NoteShelf application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(NoteShelfError):
    """
    Raised when a requested note does not exist.

    When:    GET/PUT /api/notes/{id} with an id no stored note carries.
    HTTP:    404 Not Found

    The repository itself returns None for a miss; routes convert that None
    into this exception so the status code is decided in one place.
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class CorruptDataError(NoteShelfError):
    """
    Raised when a stored file cannot be parsed into a record.

    When:    Invalid JSON, a JSON value that is not an object, or fields of the
             wrong type.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Stored data could not be parsed",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(message=message, context=ctx)
        self.key = key


class CorruptNoteError(CorruptDataError):
    """
    A note file failed to parse.

    Aborts the whole listing it was encountered in; there is no
    partial-result policy.
    """

    def __init__(self, key: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Note file '{key}' could not be parsed",
            key=key,
            context=context,
        )


class CorruptTemplateError(CorruptDataError):
    """The template file exists but does not hold a valid template record."""

    def __init__(self, key: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Template file '{key}' could not be parsed",
            key=key,
            context=context,
        )


class FileStorageError(NoteShelfError):
    """
    Raised when file system operations fail.

    What:    Could not create the notes directory, or read, write, replace or
             delete a note file.
    When:    Disk full, permission denied, missing file, I/O error.
    HTTP:    500 Internal Server Error

    Recovery:
        None. The operation is abandoned and the error is logged with the
        path and OS error; the client receives the generic failure message.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidRequestBodyError(NoteShelfError):
    """
    Raised when a request body is not valid JSON or exceeds the size limit.

    Missing fields are never an error (they fall back to defaults); only a
    body that cannot be read at all ends up here.
    """

    def __init__(
        self,
        message: str = "Request body could not be parsed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
NoteShelf Backend — Stored Record Models
==========================================

What:  Pydantic models for the two record shapes kept on disk.
How:   Each note file and the template file hold one JSON object; these
       models validate what is read back and serialize what is written.
Who:   Used by NoteRepository and TemplateStore.

On-disk shape (note):
    {
      "id": "0b5e6c0e-7f0e-4c53-9a55-2e7d3b1f7f12",
      "title": "Daily Plan",
      "description": "",
      "content": "- buy milk",
      "updatedAt": "2024-01-15T12:00:00.000Z"
    }

Keys other than the known fields are kept verbatim (extra="allow"), so
fields an operator adds to template.json travel into every new note.
The storage key a note was read from is held in a private attribute and is
therefore never part of a dump.
"""

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

DEFAULT_TITLE = "Untitled Note"

# Never persisted or returned, even if a hand-edited file carries it
_RESERVED_KEYS = ("fileName",)


class Template(BaseModel):
    """Default field values applied to new notes.

    A hand-edited template may set any field to null; create() then falls
    through to the built-in default for that field.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = DEFAULT_TITLE
    description: Optional[str] = ""
    content: Optional[str] = ""
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class Note(BaseModel):
    """
    A persisted note.

    Attributes:
        id:          Opaque identifier, assigned at creation, never changes
        title:       Display title; the storage key is derived from it
        description: Free text, may be empty
        content:     Free text, may be empty
        updated_at:  ISO-8601 UTC timestamp of the last write ("updatedAt")
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    title: str = DEFAULT_TITLE
    description: str = ""
    content: str = ""
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    _file_name: Optional[str] = PrivateAttr(default=None)

    @classmethod
    def from_record(cls, data: Dict[str, Any], file_name: Optional[str] = None) -> "Note":
        """
        Build a Note from a decoded JSON object.

        Raises:
            pydantic.ValidationError: A known field has the wrong type.
        """
        clean = {k: v for k, v in data.items() if k not in _RESERVED_KEYS}
        note = cls.model_validate(clean)
        note._file_name = file_name
        return note

    @property
    def file_name(self) -> Optional[str]:
        """Storage key this note was read from or last written to."""
        return self._file_name

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def encode_record(record: Dict[str, Any]) -> str:
    """Serialize a record the way every file in the store is written."""
    return json.dumps(record, indent=2, ensure_ascii=False)


def decode_record(raw: str) -> Dict[str, Any]:
    """
    Parse a stored file into a JSON object.

    Raises:
        ValueError: Not valid JSON, or valid JSON that is not an object.
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data

"""
NoteShelf Backend — Note Repository
=====================================

What:  Enumerates, reads, creates, and updates notes kept one-per-file.
How:   Each note lives under a storage key derived from its title
       ("Daily Plan" → "daily-plan.json"). The key is recomputed on every
       write, so renaming a note renames its file; the note's id never changes.
Who:   Called by the notes route handlers.

Key Resolution:
    base      = slugify(title) or "untitled-note"
    candidate = base + ".json"
    while candidate is taken: try base-1.json, base-2.json, ...

    "Taken" means any key in the store, template.json and non-note files
    included, except the note's own current key when it is being updated.
    The set is re-read on every write; nothing is cached between calls.

Known Limits:
    - find_by_id() lists and parses every note: O(n) per lookup.
    - Two concurrent creates with the same title can pick the same key; the
      last write wins. There is no locking.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional

from noteshelf.exceptions import CorruptDataError, CorruptNoteError, NoteShelfError
from noteshelf.models.note import DEFAULT_TITLE, Note, decode_record, encode_record
from noteshelf.services.slug import FALLBACK_SLUG, slugify
from noteshelf.services.storage import FileNoteStorage, NoteStorage
from noteshelf.services.template_service import TEMPLATE_KEY, TemplateStore

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".json"


def generate_note_id() -> str:
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-01-15T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _text_or(value: Any, fallback: Optional[str]) -> str:
    if isinstance(value, str):
        return value
    return fallback or ""


def _resolve_title(title: Any, fallback: Optional[str]) -> str:
    """Explicit title, else template title, else the default; trimmed."""
    for candidate in (title, fallback):
        if isinstance(candidate, str) and candidate:
            return candidate.strip() or DEFAULT_TITLE
    return DEFAULT_TITLE


class NoteRepository:
    """
    Note persistence on top of a NoteStorage.

    Args:
        storage:     Where note files are kept
        templates:   Template source (defaults to one over the same storage)
        generate_id: Returns a fresh unique id for each created note
        clock:       Returns the timestamp stamped into updatedAt
    """

    def __init__(
        self,
        storage: NoteStorage,
        templates: Optional[TemplateStore] = None,
        generate_id: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], str]] = None,
    ):
        self.storage = storage
        self.templates = templates or TemplateStore(storage)
        self.generate_id = generate_id or generate_note_id
        self.clock = clock or utc_timestamp

    @staticmethod
    def is_note_key(key: str) -> bool:
        return key.endswith(NOTE_SUFFIX) and key != TEMPLATE_KEY

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_all(self) -> List[Note]:
        """
        Read every note in the store, in key order.

        Raises:
            CorruptNoteError: Any one file fails to parse. The listing is
                abandoned; no partial result is returned.
        """
        keys = [key for key in await self.storage.list_keys() if self.is_note_key(key)]
        results = await asyncio.gather(
            *(self._read_note(key) for key in keys), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        for note in await self.list_all():
            if note.id == note_id:
                return note
        return None

    async def _read_note(self, key: str) -> Note:
        try:
            raw = await self.storage.read_key(key)
            return Note.from_record(decode_record(raw), file_name=key)
        except CorruptDataError as e:
            raise CorruptNoteError(key, context=e.context) from e
        except ValueError as e:
            logger.error("Note file %s is corrupt: %s", key, str(e))
            raise CorruptNoteError(key, context={"error": str(e)}) from e

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(
        self,
        title: Any = None,
        description: Any = "",
        content: Any = "",
    ) -> Note:
        """
        Create a note seeded from the template.

        A string argument is used as given. A title that is None, blank or
        not a string falls back to the template title, then "Untitled Note".
        Omitted description/content are stored as ""; passing None (or any
        other non-string) takes the template value instead.
        """
        template = await self.templates.get_template()
        record = template.to_record()
        record.update(
            id=self.generate_id(),
            title=_resolve_title(title, template.title),
            description=_text_or(description, template.description),
            content=_text_or(content, template.content),
        )
        note = Note.from_record(record)

        key = await self._resolve_key(note.title)
        await self._write(note, key)
        logger.info("Created note %s as %s", note.id, key)
        return note

    async def update(self, note_id: str, patch: Mapping[str, Any]) -> Optional[Note]:
        """
        Apply string-valued title/description/content from ``patch``.

        Returns None when no note has ``note_id``. A changed title may move
        the note to a new key; the old file is removed afterwards if it is
        still there.
        """
        note = await self.find_by_id(note_id)
        if note is None:
            return None

        title = patch.get("title")
        if isinstance(title, str):
            note.title = title.strip() or note.title
        for field in ("description", "content"):
            value = patch.get(field)
            if isinstance(value, str):
                setattr(note, field, value)

        current_key = note.file_name
        desired_key = await self._resolve_key(note.title, ignore=current_key)
        await self._write(note, desired_key)

        if desired_key != current_key:
            await self._discard_old_key(note, current_key)
            logger.info("Renamed note %s: %s -> %s", note.id, current_key, desired_key)
        else:
            logger.info("Updated note %s in %s", note.id, current_key)
        return note

    async def _resolve_key(self, title: str, ignore: Optional[str] = None) -> str:
        """First free <slug>.json, <slug>-1.json, ... for ``title``."""
        base = slugify(title or FALLBACK_SLUG) or FALLBACK_SLUG
        taken = set(await self.storage.list_keys())
        taken.discard(ignore)

        candidate = f"{base}{NOTE_SUFFIX}"
        suffix = 1
        while candidate in taken:
            candidate = f"{base}-{suffix}{NOTE_SUFFIX}"
            suffix += 1
        return candidate

    async def _discard_old_key(self, note: Note, key: Optional[str]) -> None:
        """Remove the file a renamed note moved away from, if still present.

        The note is already saved under its new key, so a failure here is
        logged and the update still succeeds.
        """
        try:
            if key in await self.storage.list_keys():
                await self.storage.delete_key(key)
        except NoteShelfError as e:
            logger.warning(
                "Note %s renamed but old file %s was not removed: %s | Context: %s",
                note.id,
                key,
                e.message,
                e.context,
            )

    async def _write(self, note: Note, key: str) -> Note:
        note.updated_at = self.clock()
        await self.storage.write_key(key, encode_record(note.to_record()))
        note._file_name = key
        return note


# ── Singleton Instance ────────────────────────────────────────────────────
# Bound to settings.notes_dir; nothing touches the disk until first use
note_repository = NoteRepository(FileNoteStorage())


def get_note_repository() -> NoteRepository:
    """FastAPI dependency; tests swap it out through app.dependency_overrides."""
    return note_repository

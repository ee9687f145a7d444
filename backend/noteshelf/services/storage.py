"""
NoteShelf Backend — Note Storage
==================================

What:  Key/value capability the repository persists notes through.
How:   NoteStorage is the abstract contract (list/read/write/delete by key);
       FileNoteStorage maps each key to a file directly inside one directory.
Who:   Used by NoteRepository and TemplateStore.

Directory Structure:
    notes/
    ├── template.json
    ├── daily-plan.json
    ├── daily-plan-1.json
    └── shopping-list.json

Write Model:
    Every write goes to a hidden temporary sibling first and is then moved
    over the target with os.replace(). A reader therefore sees either the old
    file or the new one, never a half-written note. Temporary files are never
    reported by list_keys().
"""

import logging
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

import aiofiles
import aiofiles.os

from noteshelf.config import settings
from noteshelf.exceptions import CorruptDataError, FileStorageError

logger = logging.getLogger(__name__)

_TEMP_PREFIX = "."
_TEMP_SUFFIX = ".tmp"


class NoteStorage(ABC):
    """
    Abstract interface over the note store.

    Contract:
        - Keys are flat names such as "daily-plan.json" (no directories)
        - Values are whole UTF-8 documents; there are no partial updates
        - Failures surface as FileStorageError
    """

    @abstractmethod
    async def list_keys(self) -> List[str]:
        """Return every key currently stored, sorted."""
        ...

    @abstractmethod
    async def read_key(self, key: str) -> str:
        """
        Return the stored text for ``key``.

        Raises:
            FileStorageError: The key does not exist or could not be read.
        """
        ...

    @abstractmethod
    async def write_key(self, key: str, text: str) -> None:
        """Create or overwrite ``key`` with ``text``."""
        ...

    @abstractmethod
    async def delete_key(self, key: str) -> None:
        """
        Remove ``key``.

        Raises:
            FileStorageError: The key does not exist or could not be removed.
        """
        ...


class FileNoteStorage(NoteStorage):
    """
    Directory-backed NoteStorage using aiofiles for non-blocking I/O.

    The root directory is created lazily (parents included) before every
    operation, so the store survives the directory being removed while the
    server runs.
    """

    def __init__(self, root: Optional[str] = None):
        """
        Args:
            root: Override the default notes directory (used in tests).
                  If None, uses settings.notes_dir.
        """
        self.root = Path(root or settings.notes_dir).resolve()

    def _path_for(self, key: str) -> Path:
        """Resolve a key to its file path, rejecting anything that is not a bare name."""
        if not key or key in (".", "..") or "/" in key or "\\" in key:
            raise FileStorageError(
                message="Invalid storage key",
                context={"key": key},
            )
        return self.root / key

    async def ensure_root(self) -> None:
        """Create the notes directory if missing."""
        try:
            await aiofiles.os.makedirs(self.root, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create notes directory %s: %s", self.root, str(e))
            raise FileStorageError(
                message="Could not create the notes directory",
                context={"path": str(self.root), "os_error": str(e)},
            ) from e

    async def list_keys(self) -> List[str]:
        await self.ensure_root()
        try:
            names = await aiofiles.os.listdir(self.root)
            keys = []
            for name in names:
                if name.startswith(_TEMP_PREFIX) and name.endswith(_TEMP_SUFFIX):
                    continue
                if await aiofiles.os.path.isfile(self.root / name):
                    keys.append(name)
        except OSError as e:
            logger.error("Failed to list notes directory %s: %s", self.root, str(e))
            raise FileStorageError(
                message="Could not list the notes directory",
                context={"path": str(self.root), "os_error": str(e)},
            ) from e
        return sorted(keys)

    async def read_key(self, key: str) -> str:
        path = self._path_for(key)
        await self.ensure_root()
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return await f.read()
        except UnicodeDecodeError as e:
            raise CorruptDataError(
                message=f"File '{key}' is not valid UTF-8",
                key=key,
                context={"path": str(path)},
            ) from e
        except OSError as e:
            logger.error("Failed to read %s: %s", path, str(e))
            raise FileStorageError(
                message="Could not read note file",
                context={"path": str(path), "os_error": str(e)},
            ) from e

    async def write_key(self, key: str, text: str) -> None:
        path = self._path_for(key)
        await self.ensure_root()
        temp_path = self.root / f"{_TEMP_PREFIX}{key}.{uuid.uuid4().hex[:8]}{_TEMP_SUFFIX}"
        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(text)
            await aiofiles.os.replace(temp_path, path)
            logger.debug("Wrote %s (%d chars)", key, len(text))
        except OSError as e:
            logger.error("Failed to write %s: %s", path, str(e))
            await self._discard(temp_path)
            raise FileStorageError(
                message="Could not write note file",
                context={"path": str(path), "os_error": str(e)},
            ) from e

    async def delete_key(self, key: str) -> None:
        path = self._path_for(key)
        await self.ensure_root()
        try:
            await aiofiles.os.remove(path)
            logger.debug("Deleted %s", key)
        except OSError as e:
            logger.error("Failed to delete %s: %s", path, str(e))
            raise FileStorageError(
                message="Could not delete note file",
                context={"path": str(path), "os_error": str(e)},
            ) from e

    async def _discard(self, path: Path) -> None:
        """Best-effort removal of a leftover temporary file."""
        try:
            if await aiofiles.os.path.exists(path):
                await aiofiles.os.remove(path)
        except OSError as e:
            logger.warning("Failed to clean up temporary file %s: %s", path.name, str(e))

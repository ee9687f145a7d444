"""
NoteShelf Backend — File Storage Unit Tests
=============================================

What:  Tests for FileNoteStorage against a real temporary directory.
Why:   The directory is the only shared state the service has; key handling
       and error wrapping must hold on a real filesystem.
"""

import pytest

from noteshelf.exceptions import CorruptDataError, FileStorageError
from noteshelf.services.storage import FileNoteStorage


class TestFileNoteStorage:
    """Tests for the directory-backed NoteStorage."""

    @pytest.mark.asyncio
    async def test_directory_created_lazily(self, notes_dir, file_storage):
        """Constructing the storage must not touch the disk; first use creates the directory."""
        assert not notes_dir.exists()
        assert await file_storage.list_keys() == []
        assert notes_dir.is_dir()

    @pytest.mark.asyncio
    async def test_nested_directory_created(self, tmp_path):
        storage = FileNoteStorage(str(tmp_path / "a" / "b" / "notes"))
        await storage.write_key("x.json", "{}")
        assert (tmp_path / "a" / "b" / "notes" / "x.json").exists()

    @pytest.mark.asyncio
    async def test_write_then_read(self, file_storage):
        await file_storage.write_key("daily-plan.json", '{"title": "Daily Plan"}')
        assert await file_storage.read_key("daily-plan.json") == '{"title": "Daily Plan"}'

    @pytest.mark.asyncio
    async def test_write_overwrites_whole_file(self, file_storage, notes_dir):
        await file_storage.write_key("n.json", "a much longer first version")
        await file_storage.write_key("n.json", "short")
        assert (notes_dir / "n.json").read_text(encoding="utf-8") == "short"

    @pytest.mark.asyncio
    async def test_unicode_round_trips(self, file_storage):
        await file_storage.write_key("u.json", '{"title": "Café ☕"}')
        assert await file_storage.read_key("u.json") == '{"title": "Café ☕"}'

    @pytest.mark.asyncio
    async def test_list_keys_sorted_files_only(self, file_storage, notes_dir):
        await file_storage.write_key("b.json", "{}")
        await file_storage.write_key("a.json", "{}")
        (notes_dir / "subdir").mkdir()
        (notes_dir / "readme.txt").write_text("hi", encoding="utf-8")

        assert await file_storage.list_keys() == ["a.json", "b.json", "readme.txt"]

    @pytest.mark.asyncio
    async def test_no_temporary_files_left_behind(self, file_storage, notes_dir):
        await file_storage.write_key("n.json", "{}")
        assert sorted(p.name for p in notes_dir.iterdir()) == ["n.json"]

    @pytest.mark.asyncio
    async def test_in_flight_temp_files_are_not_listed(self, file_storage, notes_dir):
        notes_dir.mkdir()
        (notes_dir / ".n.json.abcd1234.tmp").write_text("{", encoding="utf-8")
        assert await file_storage.list_keys() == []

    @pytest.mark.asyncio
    async def test_delete_removes_file(self, file_storage, notes_dir):
        await file_storage.write_key("n.json", "{}")
        await file_storage.delete_key("n.json")
        assert not (notes_dir / "n.json").exists()

    @pytest.mark.asyncio
    async def test_delete_missing_key_raises(self, file_storage):
        with pytest.raises(FileStorageError):
            await file_storage.delete_key("missing.json")

    @pytest.mark.asyncio
    async def test_read_missing_key_raises(self, file_storage):
        with pytest.raises(FileStorageError):
            await file_storage.read_key("missing.json")

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_corrupt_data(self, file_storage, notes_dir):
        notes_dir.mkdir()
        (notes_dir / "bin.json").write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(CorruptDataError):
            await file_storage.read_key("bin.json")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["", ".", "..", "../escape.json", "sub/dir.json", "a\\b.json"])
    async def test_keys_must_be_bare_names(self, file_storage, key):
        with pytest.raises(FileStorageError, match="Invalid storage key"):
            await file_storage.write_key(key, "{}")

    @pytest.mark.asyncio
    async def test_root_that_is_a_file_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "notes"
        blocker.write_text("not a directory", encoding="utf-8")
        storage = FileNoteStorage(str(blocker))
        with pytest.raises(FileStorageError, match="notes directory"):
            await storage.list_keys()

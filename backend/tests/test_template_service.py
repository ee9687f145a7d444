"""
NoteShelf Backend — Template Store Unit Tests
===============================================

What:  Tests for lazy creation and reading of template.json.
"""

import json

import pytest

from noteshelf.exceptions import CorruptTemplateError
from noteshelf.services.template_service import TEMPLATE_KEY, TemplateStore


class TestTemplateStore:
    """Tests for TemplateStore.get_template()."""

    @pytest.mark.asyncio
    async def test_creates_default_template_when_missing(self, memory_storage):
        template = await TemplateStore(memory_storage).get_template()

        assert template.title == "Untitled Note"
        assert template.description == ""
        assert template.content == ""
        assert template.updated_at is None
        assert json.loads(memory_storage.files[TEMPLATE_KEY]) == {
            "title": "Untitled Note",
            "description": "",
            "content": "",
            "updatedAt": None,
        }

    @pytest.mark.asyncio
    async def test_template_file_is_pretty_printed(self, memory_storage):
        await TemplateStore(memory_storage).get_template()
        assert memory_storage.files[TEMPLATE_KEY].startswith('{\n  "title"')

    @pytest.mark.asyncio
    async def test_existing_template_is_reused(self, memory_storage):
        memory_storage.files[TEMPLATE_KEY] = json.dumps(
            {"title": "Journal", "description": "daily", "content": "## Today", "updatedAt": None}
        )
        template = await TemplateStore(memory_storage).get_template()

        assert template.title == "Journal"
        assert template.description == "daily"
        assert template.content == "## Today"

    @pytest.mark.asyncio
    async def test_existing_template_not_rewritten(self, memory_storage):
        original = '{"title": "Journal"}'
        memory_storage.files[TEMPLATE_KEY] = original
        await TemplateStore(memory_storage).get_template()
        assert memory_storage.files[TEMPLATE_KEY] == original

    @pytest.mark.asyncio
    async def test_missing_fields_take_defaults(self, memory_storage):
        memory_storage.files[TEMPLATE_KEY] = '{"content": "body"}'
        template = await TemplateStore(memory_storage).get_template()
        assert template.title == "Untitled Note"
        assert template.content == "body"

    @pytest.mark.asyncio
    async def test_extra_keys_preserved(self, memory_storage):
        memory_storage.files[TEMPLATE_KEY] = '{"title": "T", "tags": ["inbox"]}'
        template = await TemplateStore(memory_storage).get_template()
        assert template.to_record()["tags"] == ["inbox"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["{not json", "[1, 2, 3]", '"just a string"', '{"title": 7}'])
    async def test_corrupt_template_raises(self, memory_storage, raw):
        memory_storage.files[TEMPLATE_KEY] = raw
        with pytest.raises(CorruptTemplateError):
            await TemplateStore(memory_storage).get_template()

    @pytest.mark.asyncio
    async def test_null_fields_are_accepted(self, memory_storage):
        memory_storage.files[TEMPLATE_KEY] = '{"title": null, "description": null, "content": null}'
        template = await TemplateStore(memory_storage).get_template()
        assert (template.title, template.description, template.content) == (None, None, None)

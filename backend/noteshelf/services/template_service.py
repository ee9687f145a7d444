"""
NoteShelf Backend — Template Store
====================================

What:  Provides the default shape new notes are seeded from.
How:   The template lives in the note store under the reserved key
       "template.json". The first call creates it with built-in defaults;
       later calls read whatever is stored there.
Who:   Called by NoteRepository.create().

Operators may edit template.json by hand to change the defaults or add extra
keys; those keys are copied into every note created afterwards.
"""

import logging

from pydantic import ValidationError as PydanticValidationError

from noteshelf.exceptions import CorruptTemplateError
from noteshelf.models.note import Template, decode_record, encode_record
from noteshelf.services.storage import NoteStorage

logger = logging.getLogger(__name__)

TEMPLATE_KEY = "template.json"


class TemplateStore:
    """Lazily-initialized singleton template record."""

    def __init__(self, storage: NoteStorage):
        self.storage = storage

    async def get_template(self) -> Template:
        """
        Return the stored template, creating it first if it does not exist.

        Raises:
            CorruptTemplateError: template.json is not a valid template record.
            FileStorageError: The store could not be read or written.
        """
        keys = await self.storage.list_keys()
        if TEMPLATE_KEY not in keys:
            template = Template()
            await self.storage.write_key(TEMPLATE_KEY, encode_record(template.to_record()))
            logger.info("Created default note template %s", TEMPLATE_KEY)
            return template

        raw = await self.storage.read_key(TEMPLATE_KEY)
        try:
            return Template.model_validate(decode_record(raw))
        except (ValueError, PydanticValidationError) as e:
            logger.error("Template %s is corrupt: %s", TEMPLATE_KEY, str(e))
            raise CorruptTemplateError(TEMPLATE_KEY, context={"error": str(e)}) from e

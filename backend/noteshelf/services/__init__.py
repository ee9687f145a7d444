# Services package init
"""
NoteShelf Backend — Services Layer
====================================

Service Inventory:
    - slug:              Title → filesystem-safe slug
    - storage:           NoteStorage interface + directory-backed FileNoteStorage
    - template_service:  Lazily created default note shape (template.json)
    - note_repository:   List/find/create/update notes, key collisions, renames
"""

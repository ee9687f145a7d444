"""
NoteShelf Backend — Application Package Initializer
====================================================

What: Marks the `noteshelf` directory as a Python package.
Who:  Used by uvicorn (`noteshelf.main:app`), pytest, and the console script.

Architecture Note:
    The backend is a thin layered service over a directory of JSON files:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Repository, Template)   │  ← Naming, defaulting, renames
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Stored records + API contracts
    ├─────────────────────────────────────┤
    │        Storage (Persistence)        │  ← One JSON file per note
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

# Routes package init
"""
NoteShelf Backend — API Routes Package
========================================

Route Inventory:
    - notes.py:   GET  /api/notes            (list all notes)
                  GET  /api/notes/{id}       (get single note)
                  POST /api/notes            (create note)
                  PUT  /api/notes/{id}       (update note)
    - health.py:  GET  /health               (service health check)
    - pages.py:   GET  /{path}               (static front-end files)

Routes stay thin: read the request, call the repository, shape the
response. Naming, defaulting and renames live in the services.
"""

# Services package init
"""
NotesApp Backend — Command Handlers
=====================================

    - auth_service.py:      Register / Login
    - category_service.py:  category create, get, list, update, delete
    - note_service.py:      note create, get, list, update, delete
    - projections.py:       entity → DTO mapping shared by the two above

Handlers receive the caller's id inside each command; they never look at the
HTTP request. Domain outcomes come back as Ok/Err (notesapp.results).
"""

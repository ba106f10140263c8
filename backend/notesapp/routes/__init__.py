# Routes package init
"""
NotesApp Backend — API Routes Package
=======================================

Route Inventory:
    - auth.py:        POST /api/auth/register | login | logout
    - categories.py:  POST/GET /api/categories, GET/PUT/DELETE /api/categories/{id}
    - notes.py:       POST/GET /api/notes,      GET/PUT/DELETE /api/notes/{id}
    - health.py:      GET  /health

Routes stay thin: read the request, attach the caller's id, call a handler,
unwrap its result and shape the HTTP response.
"""

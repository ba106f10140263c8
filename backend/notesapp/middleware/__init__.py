# Middleware package init
"""
NotesApp Backend — Middleware Package
=======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - request_id.py: assigns X-Request-ID and exposes it through a ContextVar
    - logging.py:    one access log line per request, level by status class
"""

"""
NotesApp Backend — Application Package
========================================

Layered layout:

    ┌─────────────────────────────────────┐
    │  routes/        HTTP, cookies       │
    ├─────────────────────────────────────┤
    │  services/      command handlers    │  ← ownership and validation rules
    ├─────────────────────────────────────┤
    │  repositories/  persistence only    │
    ├─────────────────────────────────────┤
    │  models/ + database.py              │  ← SQLAlchemy async
    └─────────────────────────────────────┘

auth/ holds the identity collaborator (password policy, user creation,
session cookies) used by the auth handlers and the route dependency.
"""

__version__ = "1.0.0"

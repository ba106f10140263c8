# Repositories package init
"""
NotesApp Backend — Repositories
=================================

What:  CRUD data access per entity, one module-level singleton each.
Why:   Handlers express ownership and integrity rules; repositories only
       translate them into queries. Handler tests patch these singletons.

Inventory:
    - user_repository:     users (lookup by id, email, username; insert)
    - category_repository: categories
    - note_repository:     notes (with category-name joins)
"""

# Auth package init
"""
NotesApp Backend — Identity & Sessions
========================================

    - passwords.py: passlib hashing and password-policy checks
    - identity.py:  UserManager (account validation, creation, credential checks)
    - session.py:   JWT session cookie issue/renewal and the get_current_user dependency
"""

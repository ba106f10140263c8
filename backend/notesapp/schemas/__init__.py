# Schemas package init
"""
API contracts. Kept separate from the SQLAlchemy models so the wire format
(camelCase DTOs) can change independently of the storage layout.
"""

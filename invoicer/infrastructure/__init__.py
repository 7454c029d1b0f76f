"""Infrastructure Layer — database access, identity, caching and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy exceptions mapped to DatabaseError before leaving this layer

Design Decisions:
    - Thin wrappers over SQLAlchemy and hashlib, one concern per module
"""

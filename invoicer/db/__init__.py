"""Database Infrastructure — declarative Base, session factory and seed routine.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (native async), aiosqlite for tests and local runs
"""

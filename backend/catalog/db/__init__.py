"""Database Infrastructure — SQLAlchemy declarative base.

Invariants:
    - Single async engine per process (infrastructure/database.py init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests (native async, no thread pool)
"""

"""Database Infrastructure — SQLAlchemy declarative Base for the SQL backend.

Invariants:
    - Single metadata object shared by ORM models, SqlStore.create_all and alembic
"""

"""ORM Models — SQLAlchemy declarative models for the SQL backend.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relationships are by id value only: no FOREIGN KEY constraints, no ORM relationships

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/alembic
"""

from taskboard.models.user import UserRow  # noqa: F401
from taskboard.models.board import BoardRow  # noqa: F401
from taskboard.models.task import TaskRow  # noqa: F401

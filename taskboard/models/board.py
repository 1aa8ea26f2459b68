"""Board ORM — boards keyed by owner.

Invariants:
    - user_id indexed: every board query is scoped by owner
    - description never NULL (empty string when omitted)
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.core.domain_types import BoardId, UserId
from taskboard.core.records import Board, ensure_utc
from taskboard.db.base import Base


class BoardRow(Base):
    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    def to_record(self) -> Board:
        return Board(
            id=BoardId(self.id), name=self.name, description=self.description,
            user_id=UserId(self.user_id), created_at=ensure_utc(self.created_at),
        )

"""User ORM — registered accounts.

Invariants:
    - id is a string UUID primary key assigned by the store
    - email is indexed but NOT unique (duplicate check lives in the register route)
"""

from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.core.domain_types import UserId
from taskboard.core.records import User, ensure_utc
from taskboard.db.base import Base


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    def to_record(self) -> User:
        return User(
            id=UserId(self.id), name=self.name, email=self.email,
            password=self.password, created_at=ensure_utc(self.created_at),
        )

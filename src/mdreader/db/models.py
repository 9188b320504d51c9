"""SQLAlchemy ORM models for the local SQLite database.

Tables:
- reading_history: Per-document reading state
- reading_lists: Documents queued for reading
"""

import json
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


class StoreRecord:
    """Dictionary conversion shared by every stored record.

    Fields listed in ``json_fields`` are kept as JSON text in the table
    and exposed through ``get_<field>``/``set_<field>`` helpers.
    """

    json_fields = ()

    @classmethod
    def column_names(cls) -> list[str]:
        return [column.key for column in cls.__table__.columns]

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary with JSON fields decoded."""
        data = {}
        for name in self.column_names():
            if name in self.json_fields:
                data[name] = getattr(self, f"get_{name}")()
            else:
                data[name] = getattr(self, name)
        return data

    def apply(self, values: dict[str, Any]) -> None:
        """Copy known fields from a dictionary onto the record."""
        columns = set(self.column_names())
        for field, value in values.items():
            if field not in columns:
                continue
            if field in self.json_fields:
                getattr(self, f"set_{field}")(value)
            else:
                setattr(self, field, value)


class HistoryRecord(StoreRecord, Base):
    """Reading state for one document.

    ``path`` is indexed but not unique: duplicate rows are a repairable
    corruption, not something the schema can rule out for old data.
    """

    __tablename__ = "reading_history"

    json_fields = ("completed_section_indices",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    path: Mapped[str] = mapped_column(String(1000), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), default="")

    # Epoch milliseconds
    last_read_at: Mapped[int] = mapped_column(Integer, default=0, index=True)

    read_count: Mapped[int] = mapped_column(Integer, default=0)
    time_spent: Mapped[int] = mapped_column(Integer, default=0)  # ms
    words_read: Mapped[int] = mapped_column(Integer, default=0)
    completed_section_indices: Mapped[Optional[str]] = mapped_column(Text)  # JSON array

    def __repr__(self) -> str:
        return f"<HistoryRecord(id={self.id}, path='{self.path}', read_count={self.read_count})>"

    def get_completed_section_indices(self) -> list[int]:
        """Get completed section indices as list."""
        if self.completed_section_indices:
            return json.loads(self.completed_section_indices)
        return []

    def set_completed_section_indices(self, indices: Optional[list[int]]) -> None:
        """Set completed section indices from list."""
        self.completed_section_indices = json.dumps(sorted(indices)) if indices else None


class ReadingListRecord(StoreRecord, Base):
    """Document queued for reading."""

    __tablename__ = "reading_lists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)

    path: Mapped[str] = mapped_column(String(1000), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), default="")

    # Epoch milliseconds
    added_at: Mapped[int] = mapped_column(Integer, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    completed_at: Mapped[Optional[int]] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<ReadingListRecord(id={self.id}, path='{self.path}', completed={self.completed})>"

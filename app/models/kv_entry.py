"""
Key-value entry model - a tiny string-to-string table.

The credential store keeps its whole state under two fixed keys (user list
and current user), the same layout a browser's local storage would hold.
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class KeyValueEntry(Base):
    """SQLAlchemy ORM model for the 'kv_entries' table."""

    __tablename__ = "kv_entries"

    # key: Storage key, e.g. "aiContentWriterUsers"
    key: Mapped[str] = mapped_column(String(255), primary_key=True)

    # value: Raw stored string (JSON for structured values)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

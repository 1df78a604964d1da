"""SQLAlchemy model for durable key-value entries."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class StoreBase(DeclarativeBase):
    """Metadata holder for the durable store tables."""


class KeyValueEntity(StoreBase):
    """A named serialized value, e.g. the cached JWKS mapping."""

    __tablename__ = "kv_entries"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

"""
SQLAlchemy ORM models for the EchoNote schema.

Tables: ``transcripts``.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from echonote.services.storage.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Transcript(Base):
    """A transcript produced by one successful transcription request.

    Rows are insert-only: they are read or deleted, never updated.
    """

    __tablename__ = "transcripts"
    __table_args__ = (Index("ix_transcripts_owner_created", "owner_id", "created_at"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    text: Mapped[str] = mapped_column(Text)
    owner_id: Mapped[str] = mapped_column(String(255))
    mime_type: Mapped[str] = mapped_column(String(255), default="application/octet-stream")
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    def __repr__(self) -> str:
        return f"<Transcript id={self.id} owner={self.owner_id!r}>"

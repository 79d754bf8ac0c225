"""Message SQLAlchemy model"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Index, Text, Uuid

from .base import Base, utcnow


class Message(Base):
    """One free-text contact form submission.

    Messages are append-only: created on every submission whatever the
    submitter's verification state, never updated or deleted.
    """
    __tablename__ = "message"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    submitter_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("submitter.id", ondelete="RESTRICT"),
        nullable=False,
    )
    body = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_message_submitter_created", "submitter_id", "created_at"),
    )

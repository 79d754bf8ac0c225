"""Submitter SQLAlchemy model"""

from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Index, Text, UniqueConstraint, Uuid

from .base import Base, utcnow


class Submitter(Base):
    """A person who has used the contact form, identified by email.

    A submitter starts unverified with a verification token and expiry. Once the
    emailed link is followed the submitter becomes verified and the token pair
    is cleared. Rows are never deleted by the application.
    """
    __tablename__ = "submitter"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    email = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    verification_token = Column(Text, nullable=True)
    token_expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Constraints
    __table_args__ = (
        CheckConstraint(
            "(verification_token IS NULL) OR (token_expires_at IS NOT NULL)",
            name="ck_submitter_token_has_expiry",
        ),
        CheckConstraint(
            "(verified = false) OR (verification_token IS NULL AND token_expires_at IS NULL)",
            name="ck_submitter_verified_has_no_token",
        ),
        UniqueConstraint("email", name="uq_submitter_email"),
        Index("idx_submitter_verification_token", "verification_token"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def issue_token(self, token: str, expires_at) -> None:
        """Replace any outstanding verification token."""
        self.verification_token = token
        self.token_expires_at = expires_at

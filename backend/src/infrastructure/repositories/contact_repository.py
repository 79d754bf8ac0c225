"""SQLAlchemy implementation of the contact RecordStorePort"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from domain.contact.ports import (
    DuplicateSubmitterError,
    RecordStoreError,
    RecordStorePort,
)
from models.message import Message
from models.submitter import Submitter

logger = logging.getLogger(__name__)


class SqlAlchemyContactStore(RecordStorePort):
    """Repository for submitter and message rows.

    Each write commits immediately; the contact flow does not span a
    transaction across calls. SQLAlchemy errors are rolled back and re-raised
    as RecordStoreError so the service never sees driver exceptions.
    """

    def __init__(self, db: Session):
        """Initialize repository with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def find_submitter_by_email(self, email: str) -> Optional[Submitter]:
        stmt = select(Submitter).where(Submitter.email == email)
        return self._scalar(stmt)

    def find_submitter_by_token(self, token: str, now: datetime) -> Optional[Submitter]:
        stmt = select(Submitter).where(
            Submitter.verification_token == token,
            Submitter.token_expires_at > now,
        )
        return self._scalar(stmt)

    def add_submitter(self, submitter: Submitter) -> Submitter:
        """Insert a new submitter.

        Raises:
            DuplicateSubmitterError: If another request created the same email first
            RecordStoreError: On any other database failure
        """
        self.db.add(submitter)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.find_submitter_by_email(submitter.email) is not None:
                raise DuplicateSubmitterError(submitter.email) from e
            raise RecordStoreError(f"Could not create submitter: {e}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not create submitter: {e}") from e

        self.db.refresh(submitter)
        return submitter

    def save_submitter(self, submitter: Submitter) -> Submitter:
        self.db.add(submitter)
        self._commit("update submitter")
        self.db.refresh(submitter)
        return submitter

    def consume_token(self, submitter: Submitter, token: str, now: datetime) -> bool:
        stmt = (
            update(Submitter)
            .where(
                Submitter.id == submitter.id,
                Submitter.verification_token == token,
                Submitter.token_expires_at > now,
            )
            .values(verified=True, verification_token=None, token_expires_at=None)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RecordStoreError(f"Could not consume token: {e}") from e
        self._commit("consume token")
        self.db.refresh(submitter)
        return result.rowcount == 1

    def add_message(self, submitter: Submitter, body: str) -> Message:
        message = Message(submitter_id=submitter.id, body=body)
        self.db.add(message)
        self._commit("store message")
        self.db.refresh(message)
        return message

    def list_messages(self, submitter: Submitter) -> List[Message]:
        stmt = (
            select(Message)
            .where(Message.submitter_id == submitter.id)
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise RecordStoreError(f"Could not load messages: {e}") from e

    def _scalar(self, stmt) -> Optional[Submitter]:
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RecordStoreError(f"Submitter lookup failed: {e}") from e

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}", exc_info=True)
            raise RecordStoreError(f"Could not {action}: {e}") from e

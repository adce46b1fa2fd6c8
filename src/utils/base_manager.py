"""Shared session handling for the data managers."""

import logging
from typing import Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, LectureReportingError, StoreError

logger = logging.getLogger(__name__)


class BaseManager:
    """Base class for managers that own a request-scoped session."""

    def __init__(self, db: Session):
        """Initialize the manager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _commit(
        self,
        conflict_message: str = "Resource already exists",
        conflict_error: Type[LectureReportingError] = ConflictError,
    ) -> None:
        """Commit the session, translating driver errors.

        Args:
            conflict_message: Message used when a unique constraint fails.
            conflict_error: Exception type raised on a constraint failure.

        Raises:
            LectureReportingError: ``conflict_error`` on integrity failures.
            StoreError: On any other database failure.
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            # Rollback the failed transaction
            self.db.rollback()
            logger.info("Integrity error on commit: %s", e.orig)
            raise conflict_error(conflict_message) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database error on commit: %s", e)
            raise StoreError("Database error") from e

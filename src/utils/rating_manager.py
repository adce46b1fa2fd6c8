"""Report rating management."""

import logging
from datetime import datetime
from typing import List

import pytz

from core.exceptions import NotFoundError
from models.rating import RatingModel
from models.report import ReportModel
from schemas.rating import CreateRatingRequest
from schemas.user import TokenClaims
from utils.base_manager import BaseManager
from utils.scoping import apply_scope, rating_predicate, report_predicate

logger = logging.getLogger(__name__)


class RatingManager(BaseManager):
    """Manages ratings left on reports. Ratings are never edited."""

    def create_rating(
        self, req: CreateRatingRequest, identity: TokenClaims
    ) -> RatingModel:
        """Record a rating from the caller on a report they can see.

        Raises:
            NotFoundError: If the report does not exist or is outside the
                caller's scope.
        """
        report = apply_scope(
            self.db.query(ReportModel).filter(ReportModel.id == req.report_id),
            report_predicate(identity),
        ).first()
        if not report:
            raise NotFoundError("Report", req.report_id)

        model = RatingModel(
            report_id=req.report_id,
            user_id=identity.id,
            rating=req.rating,
            comments=req.comments,
            type=req.type.value,
            timestamp=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self._commit()
        self.db.refresh(model)
        logger.info("User %s rated report %s", identity.id, req.report_id)
        return model

    def list_ratings(self, identity: TokenClaims) -> List[RatingModel]:
        query = apply_scope(self.db.query(RatingModel), rating_predicate(identity))
        return query.order_by(RatingModel.id.desc()).all()

    def list_all_ratings(self) -> List[RatingModel]:
        return self.db.query(RatingModel).order_by(RatingModel.id.desc()).all()

    def list_report_ratings(self, report_id: int) -> List[RatingModel]:
        return (
            self.db.query(RatingModel)
            .filter(RatingModel.report_id == report_id)
            .order_by(RatingModel.id.desc())
            .all()
        )

    def list_lecturer_ratings(self, lecturer_id: int) -> List[RatingModel]:
        """Ratings left on any report written by ``lecturer_id``."""
        return (
            self.db.query(RatingModel)
            .join(ReportModel, ReportModel.id == RatingModel.report_id)
            .filter(ReportModel.lecturer_id == lecturer_id)
            .order_by(RatingModel.id.desc())
            .all()
        )

    def list_user_ratings(self, user_id: int) -> List[RatingModel]:
        return (
            self.db.query(RatingModel)
            .filter(RatingModel.user_id == user_id)
            .order_by(RatingModel.id.desc())
            .all()
        )

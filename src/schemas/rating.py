from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RatingType(str, Enum):
    STUDENT_ENGAGEMENT = "student_engagement"
    CLASS_PERFORMANCE = "class_performance"
    COURSE_DELIVERY = "course_delivery"
    CONTENT_QUALITY = "content_quality"
    OVERALL = "overall"


class CreateRatingRequest(BaseModel):
    report_id: int
    rating: int = Field(ge=1, le=5)
    comments: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("comments", "comment"),
    )
    type: RatingType = RatingType.OVERALL


class RatingInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    report_id: int
    user_id: int
    rating: int
    comments: Optional[str] = None
    type: RatingType
    timestamp: str

"""Database models.

Importing this package registers every table with ``Base.metadata``.
"""

from .base import Base
from .user import UserModel
from .course import CourseModel
from .module import ModuleModel
from .enrollment import EnrollmentModel
from .class_model import ClassModel
from .report import ReportModel
from .rating import RatingModel
from .monitoring_log import MonitoringLogModel

__all__ = [
    "Base",
    "UserModel",
    "CourseModel",
    "ModuleModel",
    "EnrollmentModel",
    "ClassModel",
    "ReportModel",
    "RatingModel",
    "MonitoringLogModel",
]

"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes.
Tests swap implementations through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

import config
from core.database import get_db
from core.security import TokenService
from utils import class_manager
from utils import course_manager
from utils import module_manager
from utils import monitoring_manager
from utils import rating_manager
from utils import report_manager
from utils import search_manager
from utils import user_manager

# Singleton for TokenService (stateless apart from its settings)
_token_service_instance: TokenService = None


def get_token_service() -> TokenService:
    """Get TokenService singleton instance.

    Returns:
        TokenService configured from environment settings.
    """
    global _token_service_instance
    if _token_service_instance is None:
        _token_service_instance = TokenService(
            secret_key=config.JWT_SECRET_KEY,
            algorithm=config.JWT_ALGORITHM,
            expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_grace_minutes=config.REFRESH_GRACE_MINUTES,
        )
    return _token_service_instance


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_course_manager(db: Session = Depends(get_db)) -> course_manager.CourseManager:
    """Get CourseManager instance with request-scoped DB session."""
    return course_manager.CourseManager(db)


def get_module_manager(db: Session = Depends(get_db)) -> module_manager.ModuleManager:
    """Get ModuleManager instance with request-scoped DB session."""
    return module_manager.ModuleManager(db)


def get_class_manager(db: Session = Depends(get_db)) -> class_manager.ClassManager:
    """Get ClassManager instance with request-scoped DB session."""
    return class_manager.ClassManager(db)


def get_report_manager(db: Session = Depends(get_db)) -> report_manager.ReportManager:
    """Get ReportManager instance with request-scoped DB session."""
    return report_manager.ReportManager(db)


def get_rating_manager(db: Session = Depends(get_db)) -> rating_manager.RatingManager:
    """Get RatingManager instance with request-scoped DB session."""
    return rating_manager.RatingManager(db)


def get_monitoring_manager(
    db: Session = Depends(get_db),
) -> monitoring_manager.MonitoringManager:
    """Get MonitoringManager instance with request-scoped DB session."""
    return monitoring_manager.MonitoringManager(db)


def get_search_manager(db: Session = Depends(get_db)) -> search_manager.SearchManager:
    """Get SearchManager instance with request-scoped DB session."""
    return search_manager.SearchManager(db)


# Type aliases for dependency injection
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
CourseManagerDep = Annotated[course_manager.CourseManager, Depends(get_course_manager)]
ModuleManagerDep = Annotated[module_manager.ModuleManager, Depends(get_module_manager)]
ClassManagerDep = Annotated[class_manager.ClassManager, Depends(get_class_manager)]
ReportManagerDep = Annotated[report_manager.ReportManager, Depends(get_report_manager)]
RatingManagerDep = Annotated[rating_manager.RatingManager, Depends(get_rating_manager)]
MonitoringManagerDep = Annotated[
    monitoring_manager.MonitoringManager, Depends(get_monitoring_manager)
]
SearchManagerDep = Annotated[search_manager.SearchManager, Depends(get_search_manager)]

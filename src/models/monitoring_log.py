from sqlalchemy import Column, ForeignKey, Integer, String
from .base import Base


class MonitoringLogModel(Base):
    __tablename__ = "monitoring_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    action = Column(String, nullable=False)
    created_at = Column(String, nullable=False)

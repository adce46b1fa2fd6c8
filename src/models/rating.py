from sqlalchemy import Column, ForeignKey, Integer, String, Text
from .base import Base


class RatingModel(Base):
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(
        Integer, ForeignKey("reports.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    rating = Column(Integer, nullable=False)
    comments = Column(Text, nullable=True)
    type = Column(String, nullable=False, default="overall")
    timestamp = Column(String, nullable=False)

from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from config.database import Base
from api.user.user_model import User
from api.reports.cleanings_model import Cleaning


class ReportStatus(str, enum.Enum):
    PENDING     = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED   = "COMPLETED"


class TrashReport(Base):
    __tablename__ = "trash_reports"

    id          = Column(String(64), primary_key=True, index=True)
    user_id     = Column(Integer, ForeignKey("users.id"), nullable=True)

    description = Column(Text, nullable=True)
    latitude    = Column(Float, nullable=False)
    longitude   = Column(Float, nullable=False)
    image_url   = Column(String, nullable=True)
    status      = Column(Enum(ReportStatus), default=ReportStatus.PENDING, nullable=False, index=True)

    created_at  = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # relationships
    user     = relationship(User, foreign_keys=[user_id])
    cleaning = relationship(
        Cleaning,
        back_populates="report",
        uselist=False,
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<TrashReport(id={self.id}, status={self.status})>"

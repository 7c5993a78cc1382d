from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from config.database import Base


class Cleaning(Base):
    __tablename__ = "cleanings"

    id              = Column(String(64), primary_key=True)
    report_id       = Column(String(64), ForeignKey("trash_reports.id", ondelete="CASCADE"), nullable=False, unique=True)
    volunteer_id    = Column(Integer, ForeignKey("users.id"), nullable=True)
    after_image_url = Column(String, nullable=True)
    cleaned_at      = Column(DateTime, default=datetime.utcnow, nullable=False)

    report    = relationship("TrashReport", back_populates="cleaning")
    volunteer = relationship("User", foreign_keys=[volunteer_id])

    def __repr__(self):
        return f"<Cleaning(id={self.id}, report_id={self.report_id})>"

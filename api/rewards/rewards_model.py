# rewards_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from config.database import Base
import enum

class GiftCategory(enum.Enum):
    badge  = 'badge'
    trophy = 'trophy'
    crown  = 'crown'

class VirtualGift(Base):
    __tablename__ = "virtual_gifts"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    name        = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    image_url   = Column(String(255), nullable=True)
    points_cost = Column(Integer, nullable=False)
    category    = Column(Enum(GiftCategory), nullable=False, default=GiftCategory.badge)

    user_gifts = relationship(
        "UserGift",
        back_populates="gift",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<VirtualGift(id={self.id}, name='{self.name}', cost={self.points_cost})>"


class UserGift(Base):
    __tablename__ = "user_gifts"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    user_id     = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    gift_id     = Column(Integer, ForeignKey("virtual_gifts.id", ondelete="CASCADE"), nullable=False)
    redeemed_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="gifts")
    gift = relationship(VirtualGift, back_populates="user_gifts")

    def __repr__(self):
        return f"<UserGift(user_id={self.user_id}, gift_id={self.gift_id})>"

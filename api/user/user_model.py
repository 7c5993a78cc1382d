# api/user/user_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.orm import relationship
from config.database import Base
import enum
from api.user.user_points_model import UserPointsLog
from api.rewards.rewards_model import UserGift

class UserRole(enum.Enum):
    villager  = 'villager'
    volunteer = 'volunteer'

class User(Base):
    __tablename__ = 'users'

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String(255), nullable=True)
    # natural identifier for lookups; several anonymous rows may have none
    email       = Column(String(255), nullable=True, unique=True, index=True)
    role        = Column(Enum(UserRole), nullable=False, default=UserRole.villager)
    points      = Column(Integer, nullable=False, default=0)
    created_at  = Column(DateTime, default=datetime.utcnow, nullable=False)

    points_log = relationship(
        UserPointsLog,
        back_populates="user",
        cascade="all, delete-orphan",
        order_by=UserPointsLog.id.desc()
    )
    gifts = relationship(
        UserGift,
        back_populates="user",
        cascade="all, delete-orphan",
        order_by=UserGift.id.desc()
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', points={self.points})>"

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional
from api.rewards.rewards_model import GiftCategory
from api.user.user_schema import PointsLogResponse


class GiftBase(BaseModel):
    name: str
    description: str
    image_url: Optional[str] = None
    points_cost: int = Field(..., ge=0)
    category: GiftCategory = GiftCategory.badge

class GiftCreate(GiftBase):
    pass

class GiftRead(GiftBase):
    id: int

    model_config = ConfigDict(from_attributes=True)

class UserGiftRead(BaseModel):
    id: int
    gift: GiftRead
    redeemed_at: datetime

    model_config = ConfigDict(from_attributes=True)

class LevelRead(BaseModel):
    name: str
    min_points: int
    progress_points: int
    progress_max: int

class RewardProfile(BaseModel):
    email: str
    name: Optional[str] = None
    points: int
    level: LevelRead
    gifts: List[UserGiftRead]
    recent_activity: List[PointsLogResponse]

class RedeemRequest(BaseModel):
    email: str = Field(..., min_length=1)
    gift_id: int

class RedeemResponse(BaseModel):
    gift: UserGiftRead
    points_remaining: int

import logging
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.rewards.rewards_model import GiftCategory, UserGift, VirtualGift
from api.rewards.rewards_schema import (
    GiftCreate,
    LevelRead,
    RedeemResponse,
    RewardProfile,
    UserGiftRead,
)
from api.user.user_schema import PointsLogResponse
from api.user.user_service import (
    InsufficientPoints,
    adjust_points,
    get_user_by_email,
    get_user_points_log,
)
from config.points_config import LEVELS, MAX_LEVEL_POINTS, PointReason
from services.base_service import BaseService

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5

DEFAULT_GIFTS = [
    GiftCreate(name="Eco Warrior Badge", description="For reporting 5 trash locations",
               points_cost=50, category=GiftCategory.badge),
    GiftCreate(name="Clean Village Trophy", description="For helping clean 10 areas",
               points_cost=100, category=GiftCategory.trophy),
    GiftCreate(name="Green Crown", description="For being an environmental champion",
               points_cost=200, category=GiftCategory.crown),
    GiftCreate(name="Recycling Star", description="For promoting recycling",
               points_cost=75, category=GiftCategory.badge),
    GiftCreate(name="Nature Guardian Medal", description="For protecting nature",
               points_cost=150, category=GiftCategory.badge),
    GiftCreate(name="Super Cleaner Trophy", description="For exceptional cleaning efforts",
               points_cost=175, category=GiftCategory.trophy),
]


def level_for(points: int) -> LevelRead:
    for min_points, name in LEVELS:
        if points >= min_points:
            break
    return LevelRead(
        name=name,
        min_points=min_points,
        progress_points=max(0, min(points, MAX_LEVEL_POINTS)),
        progress_max=MAX_LEVEL_POINTS,
    )


class RewardService(BaseService[VirtualGift]):
    """Gift catalog, kids' reward profiles and redemption."""

    def __init__(self, db: Session):
        super().__init__(db, VirtualGift)

    def list_gifts(self) -> List[VirtualGift]:
        return (
            self.db.query(VirtualGift)
              .order_by(VirtualGift.points_cost.asc(), VirtualGift.id.asc())
              .all()
        )

    def seed_gifts(self) -> int:
        """Fill an empty catalog with the default gifts. Returns how many were added."""
        if self.count():
            return 0
        for gift in DEFAULT_GIFTS:
            self.db.add(VirtualGift(**gift.model_dump()))
        self.db.commit()
        logger.info("Seeded %d virtual gifts", len(DEFAULT_GIFTS))
        return len(DEFAULT_GIFTS)

    def _get_user_or_404(self, email: str):
        user = get_user_by_email(self.db, email)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    def get_profile(self, email: str) -> RewardProfile:
        user = self._get_user_or_404(email)
        activity = get_user_points_log(self.db, user.id, limit=RECENT_ACTIVITY_LIMIT)
        return RewardProfile(
            email=user.email,
            name=user.name,
            points=user.points,
            level=level_for(user.points),
            gifts=[UserGiftRead.model_validate(g) for g in user.gifts],
            recent_activity=[PointsLogResponse.model_validate(a) for a in activity],
        )

    def redeem(self, email: str, gift_id: int) -> RedeemResponse:
        user = self._get_user_or_404(email)
        gift = self.get_by_id_or_404(gift_id)

        try:
            # balance check and deduction happen under the same row lock
            user, _ = adjust_points(
                self.db, user.id, -gift.points_cost, PointReason.gift_redeemed, commit=False
            )
        except InsufficientPoints:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "code": "NOT_ENOUGH_POINTS",
                    "message": f"{gift.name} costs {gift.points_cost} points, you have {user.points}",
                },
            )

        user_gift = UserGift(user_id=user.id, gift_id=gift.id)
        self.db.add(user_gift)
        self.db.commit()
        self.db.refresh(user)
        self.db.refresh(user_gift)
        logger.info("User %s redeemed %s", user.id, gift.name)

        return RedeemResponse(
            gift=UserGiftRead.model_validate(user_gift),
            points_remaining=user.points,
        )

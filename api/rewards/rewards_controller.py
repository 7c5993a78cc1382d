from typing import List
from sqlalchemy.orm import Session
from api.rewards.rewards_schema import GiftRead, RedeemRequest, RedeemResponse, RewardProfile
from api.rewards.rewards_service import RewardService


def list_gifts_controller(db: Session) -> List[GiftRead]:
    return [GiftRead.model_validate(g) for g in RewardService(db).list_gifts()]


def get_profile_controller(email: str, db: Session) -> RewardProfile:
    return RewardService(db).get_profile(email)


def redeem_gift_controller(payload: RedeemRequest, db: Session) -> RedeemResponse:
    return RewardService(db).redeem(payload.email, payload.gift_id)

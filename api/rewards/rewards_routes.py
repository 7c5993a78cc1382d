from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.database import get_db
from api.rewards.rewards_controller import (
    list_gifts_controller,
    get_profile_controller,
    redeem_gift_controller,
)
from api.rewards.rewards_schema import GiftRead, RedeemRequest, RedeemResponse, RewardProfile

router = APIRouter(prefix="/rewards", tags=["Kids Rewards"])


@router.get("/gifts", response_model=List[GiftRead], summary="Virtual gift catalog")
def list_gifts(db: Session = Depends(get_db)):
    return list_gifts_controller(db)


@router.get("/profile", response_model=RewardProfile, summary="Points, level and gifts of a user")
def get_reward_profile(
    email: str = Query(..., description="Email used when reporting"),
    db: Session = Depends(get_db),
):
    return get_profile_controller(email, db)


@router.post("/redeem", response_model=RedeemResponse, summary="Spend points on a gift")
def redeem_gift(payload: RedeemRequest, db: Session = Depends(get_db)):
    return redeem_gift_controller(payload, db)

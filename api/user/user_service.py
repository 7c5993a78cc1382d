from typing import Optional, Tuple

from sqlalchemy.orm import Session
from api.user.user_model import User, UserRole
from api.user.user_points_model import UserPointsLog
from config.points_config import PointReason, POINT_VALUES


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).one_or_none()


def find_or_create_user(
    db: Session,
    name: Optional[str] = None,
    email: Optional[str] = None,
    role: UserRole = UserRole.villager,
) -> Optional[User]:
    """
    Reuse the user with this email, or create one on first sight.
    Without an email a fresh row is created if a name is given;
    with neither the caller stays anonymous and None is returned.
    The new row is committed on its own.
    """
    if email:
        user = get_user_by_email(db, email)
        if user:
            return user
    elif not name:
        return None

    user = User(name=name, email=email or None, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


class InsufficientPoints(ValueError):
    """A deduction would take a user's balance below zero."""


def award_points(
    db: Session,
    user_id: int,
    reason: PointReason,
    commit: bool = True
) -> Optional[Tuple[User, UserPointsLog]]:
    """
    Award points to `user_id` for the given `reason`.
    Returns (updated_user, log) or None if reason has no points.
    With commit=False the change joins the caller's transaction.
    """
    delta = POINT_VALUES.get(reason, 0)
    if delta <= 0:
        return None
    return adjust_points(db, user_id, delta, reason, commit=commit)


def adjust_points(
    db: Session,
    user_id: int,
    delta: int,
    reason: PointReason,
    commit: bool = True
) -> Tuple[User, UserPointsLog]:
    # row lock so concurrent deductions see each other's balance
    target = (
        db.query(User)
          .filter(User.id == user_id)
          .with_for_update()
          .populate_existing()
          .one()
    )
    if target.points + delta < 0:
        raise InsufficientPoints(f"User {user_id} has {target.points} points, cannot apply {delta}")
    target.points += delta

    log = UserPointsLog(
        user_id=user_id,
        delta=delta,
        reason=reason.value
    )
    db.add(log)
    if commit:
        db.commit()
        db.refresh(target)
    return target, log


def get_user_points_log(
    db: Session,
    user_id: int,
    limit: Optional[int] = None
    ) -> list[UserPointsLog]:
    query = (
        db.query(UserPointsLog)
          .filter(UserPointsLog.user_id == user_id)
          .order_by(UserPointsLog.id.desc())
    )
    if limit:
        query = query.limit(limit)
    return query.all()

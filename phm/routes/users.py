# PHM/backend/phm/routes/users.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from phm import auth, config
from phm.database import get_db
from phm.errors import NotFound, Unauthorized, ValidationError
from phm.models import models as db_models
from phm.schemas.schemas import UserOut, UserUpdate, PasswordChange

router = APIRouter(prefix="/users", tags=["users"])


def _get_user(db: Session, user_id: int) -> db_models.User:
    user = db.get(db_models.User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


@router.get("/{user_id}", response_model=UserOut)
def get_profile(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user)
):
    """Own profile, without the password hash"""
    auth.require_self(user_id, current_user)
    return _get_user(db, user_id)


@router.put("/{user_id}", response_model=UserOut)
def update_profile(
    user_id: int,
    update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user)
):
    auth.require_self(user_id, current_user)
    user = _get_user(db, user_id)
    user.name = update.name
    user.phone = update.phone
    user.location = update.location
    db.commit()
    db.refresh(user)
    return user


@router.put("/{user_id}/password")
def change_password(
    user_id: int,
    change: PasswordChange,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user)
):
    auth.require_self(user_id, current_user)
    if len(change.new_password) < config.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"New password must be at least {config.MIN_PASSWORD_LENGTH} characters long"
        )

    user = _get_user(db, user_id)
    if not auth.verify_password(change.current_password, user.password_hash):
        raise Unauthorized("Current password is incorrect")

    user.password_hash = auth.hash_password(change.new_password)
    db.commit()
    return {"message": "Password updated successfully"}

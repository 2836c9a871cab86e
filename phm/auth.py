# PHM/backend/phm/auth.py

import logging
from datetime import datetime, timezone, timedelta
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from phm import config
from phm.database import get_db
from phm.errors import Unauthorized, Forbidden
from phm.models import models as db_models

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# Bearer header first, auth cookie as fallback (see get_token)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed or unknown hash
        return False


def create_access_token(user: db_models.User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "userType": user.user_type.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Payload of a valid token; Unauthorized for anything else"""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError as e:
        logger.debug(f"Token verification failed: {e}")
        raise Unauthorized("Invalid token")
    if payload.get("sub") is None:
        raise Unauthorized("Invalid token")
    return payload


def get_token(request: Request, bearer: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    return bearer or request.cookies.get(config.AUTH_COOKIE_NAME)


def get_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db)
) -> db_models.User:
    """The user behind the request token, checked against the database"""
    if not token:
        raise Unauthorized("Unauthorized")
    payload = decode_access_token(token)
    try:
        user_id = int(payload["sub"])
    except ValueError:
        raise Unauthorized("Invalid token")
    user = db.get(db_models.User, user_id)
    if user is None:
        raise Unauthorized("User no longer exists")
    return user


def require_self(user_id: int, current_user: db_models.User):
    """Profile endpoints are restricted to the user they describe"""
    if current_user.id != user_id:
        raise Forbidden("Forbidden")

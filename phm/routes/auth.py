# PHM/backend/phm/routes/auth.py

import logging
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from phm import auth, config
from phm.database import get_db
from phm.errors import Conflict, Unauthorized
from phm.models import models as db_models
from phm.schemas.schemas import UserCreate, UserCreated, LoginRequest, Token, VerifiedUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserCreated, status_code=201)
def register(user: UserCreate, db: Session = Depends(get_db)):
    existing = db.query(db_models.User).filter(db_models.User.email == user.email).first()
    if existing:
        raise Conflict("User with this email already exists")

    new_user = db_models.User(
        name=user.name,
        email=user.email,
        password_hash=auth.hash_password(user.password),
        phone=user.phone,
        location=user.location,
        user_type=user.user_type,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info(f"✅ User {new_user.id} registered as {new_user.user_type.value}")
    return {"message": "User registered successfully", "user_id": new_user.id}


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    db_user = db.query(db_models.User).filter(db_models.User.email == credentials.email).first()
    if not db_user or not auth.verify_password(credentials.password, db_user.password_hash):
        raise Unauthorized("Invalid email or password")

    token = auth.create_access_token(db_user)
    response.set_cookie(
        key=config.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=config.is_production(),
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )
    return {"access_token": token, "token_type": "bearer", "user": db_user}


@router.get("/verify", response_model=VerifiedUser)
def verify(current_user: db_models.User = Depends(auth.get_current_user)):
    """User behind the current token"""
    return {"user": current_user}


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(key=config.AUTH_COOKIE_NAME, path="/")
    return {"message": "Logged out successfully"}

# PHM/backend/phm/config.py

import os
import logging
from dotenv import load_dotenv
from pathlib import Path

logger = logging.getLogger(__name__)

# Absolute path of the folder holding this file (phm/)
BASE_DIR = Path(__file__).parent.absolute()
env_path = BASE_DIR / '.env'

if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    logger.info(f"✅ .env loaded from {env_path}")
else:
    logger.debug(f"No .env file at {env_path}, using environment only")

# ============================================
# ENVIRONMENT
# ============================================
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# ============================================
# DATABASE
# ============================================
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./phm.db")

# ============================================
# JWT / AUTH
# ============================================
SECRET_KEY = os.getenv("SECRET_KEY", "change_this_secret_key_in_production")
if SECRET_KEY == "change_this_secret_key_in_production" and ENVIRONMENT == "production":
    raise ValueError("SECRET_KEY must be changed in production")

ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24h
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "auth_token")
MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "8"))

# ============================================
# BOOKINGS
# ============================================
# Off by default: a cancelled booking keeps its capacity reserved.
RESTORE_CAPACITY_ON_CANCEL = os.getenv("RESTORE_CAPACITY_ON_CANCEL", "false").lower() == "true"

# ============================================
# CORS (frontend)
# ============================================
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")

# ============================================
# LOGGING
# ============================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def is_production():
    """True when running in production"""
    return ENVIRONMENT == "production"


def is_development():
    """True when running in development"""
    return ENVIRONMENT == "development"

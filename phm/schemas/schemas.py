# PHM/backend/phm/schemas/schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_validator, field_serializer, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime, timezone
from phm.models.models import UserType, CropStatus, BookingStatus


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case (or camelCase) accepted on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _as_list(value):
    # Feature lists come back from the ORM as a list property; accept any iterable
    return list(value) if value is not None else []


# ---------- USER SCHEMAS ----------
class UserCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    location: str = Field(min_length=1)
    user_type: UserType


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    phone: str
    location: str
    user_type: UserType
    created_at: Optional[datetime] = None


class UserSummary(CamelModel):
    id: int
    name: str
    email: str
    user_type: UserType


class UserUpdate(CamelModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    location: str = Field(min_length=1)


class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


class UserCreated(CamelModel):
    message: str
    user_id: int


# ---------- TOKEN SCHEMAS ----------
class LoginRequest(CamelModel):
    email: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary


class VerifiedUser(BaseModel):
    user: UserSummary


# ---------- CROP SCHEMAS ----------
class CropCreate(CamelModel):
    name: str = Field(min_length=1)
    farmer: int
    location: str = ""
    quantity: float = Field(gt=0)
    unit: str = "kg"
    price: float = Field(gt=0)
    quality: str = ""
    harvest_date: Optional[datetime] = None
    description: Optional[str] = None
    image: Optional[str] = None


class CropUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    quality: Optional[str] = None
    harvest_date: Optional[datetime] = None
    description: Optional[str] = None
    image: Optional[str] = None
    status: Optional[CropStatus] = None

    @field_validator("name", "quantity", "unit", "price", "status")
    @classmethod
    def not_null(cls, value):
        # Omit the field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class CropOut(CamelModel):
    id: int
    name: str
    farmer: int
    location: Optional[str] = ""
    quantity: float
    unit: Optional[str] = None
    price: float
    quality: Optional[str] = ""
    harvest_date: Optional[datetime] = None
    description: Optional[str] = None
    image: Optional[str] = None
    status: CropStatus
    created_at: Optional[datetime] = None


class CropCreated(CamelModel):
    message: str
    crop_id: int


# ---------- STORAGE SCHEMAS ----------
class StorageCreate(CamelModel):
    name: str = Field(min_length=1)
    provider: int
    location: str = ""
    capacity: float = Field(gt=0)
    price_per_ton: float = Field(gt=0)
    features: List[str] = []
    description: Optional[str] = None
    image: Optional[str] = None


class StorageOut(CamelModel):
    id: int
    name: str
    provider: int
    location: Optional[str] = ""
    capacity: float
    available: float
    price_per_ton: float
    features: List[str] = []
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("features", mode="before")
    @classmethod
    def features_as_list(cls, value):
        return _as_list(value)


class StorageCreated(CamelModel):
    message: str
    storage_id: int


# ---------- TRANSPORT SCHEMAS ----------
class TransportCreate(CamelModel):
    name: str = Field(min_length=1)
    provider: int
    location: str = ""
    vehicle_type: str = ""
    capacity: float = Field(gt=0)
    price_per_km: float = Field(gt=0)
    features: List[str] = []
    description: Optional[str] = None
    image: Optional[str] = None


class TransportOut(CamelModel):
    id: int
    name: str
    provider: int
    location: Optional[str] = ""
    vehicle_type: Optional[str] = ""
    capacity: float
    price_per_km: float
    availability: str
    features: List[str] = []
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("features", mode="before")
    @classmethod
    def features_as_list(cls, value):
        return _as_list(value)


class TransportCreated(CamelModel):
    message: str
    transport_id: int


# ---------- BOOKING SCHEMAS ----------
class StorageBookingCreate(CamelModel):
    storage: int
    farmer: int
    crop: int
    quantity: float = Field(gt=0)
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def as_naive_utc(cls, value: datetime) -> datetime:
        # Dates are stored naive; an explicit offset is converted to UTC first
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_date <= self.start_date:
            raise ValueError("endDate must be after startDate")
        return self


class StorageBookingOut(CamelModel):
    id: int
    storage: int
    farmer: int
    crop: int
    quantity: float
    start_date: datetime
    end_date: datetime
    status: BookingStatus
    total_price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("start_date", "end_date")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()


class TransportBookingCreate(CamelModel):
    transport: int
    user: int
    crop: Optional[int] = None
    pickup_location: str = Field(min_length=1)
    delivery_location: str = Field(min_length=1)
    distance: float = Field(gt=0)
    quantity: float = Field(0, ge=0)
    date: datetime


class TransportBookingOut(CamelModel):
    id: int
    transport: int
    user: int
    crop: Optional[int] = None
    pickup_location: str
    delivery_location: str
    distance: float
    quantity: Optional[float] = 0
    date: datetime
    status: BookingStatus
    total_price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("date")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()


class BookingCreated(CamelModel):
    message: str
    booking_id: int
    total_price: float
    status: BookingStatus


# ---------- CONTACT ----------
class ContactMessage(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    subject: Optional[str] = None
    message: str = Field(min_length=1)


# ---------- DASHBOARD ----------
class DashboardOut(BaseModel):
    variant: str
    path: str
    user: UserSummary
    summary: dict

# PHM/backend/phm/models/models.py

import enum
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Text, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from phm.database import Base


class UserType(str, enum.Enum):
    FARMER = "farmer"
    BUYER = "buyer"
    TRANSPORTER = "transporter"
    STORAGE_PROVIDER = "storage"
    COOPERATIVE = "cooperative"


class CropStatus(str, enum.Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


def _enum_column(enum_cls, **kwargs):
    # Store the value ("pending"), not the member name ("PENDING")
    return Column(
        Enum(enum_cls, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        **kwargs
    )


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    location = Column(String, nullable=False)
    user_type = _enum_column(UserType, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Crop(Base):
    __tablename__ = "crops"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    farmer = Column("farmer_id", Integer, ForeignKey("users.id"), nullable=False, index=True)
    location = Column(String, default="")
    quantity = Column(Float, nullable=False)
    unit = Column(String, default="kg")
    price = Column(Float, nullable=False)
    quality = Column(String, default="")
    harvest_date = Column(DateTime, nullable=True)
    description = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
    status = _enum_column(CropStatus, default=CropStatus.AVAILABLE, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Storage(Base):
    __tablename__ = "storage"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    provider = Column("provider_id", Integer, ForeignKey("users.id"), nullable=False, index=True)
    location = Column(String, default="")
    capacity = Column(Float, nullable=False)
    available = Column(Float, nullable=False)
    price_per_ton = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    feature_rows = relationship(
        "StorageFeature", cascade="all, delete-orphan", order_by="StorageFeature.id", lazy="selectin"
    )

    @property
    def features(self):
        return [f.name for f in self.feature_rows]

    @features.setter
    def features(self, names):
        self.feature_rows = [StorageFeature(name=n) for n in names or []]


class StorageFeature(Base):
    __tablename__ = "storage_features"
    id = Column(Integer, primary_key=True)
    storage_id = Column(Integer, ForeignKey("storage.id"), nullable=False, index=True)
    name = Column(String, nullable=False)


class Transport(Base):
    __tablename__ = "transport"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    provider = Column("provider_id", Integer, ForeignKey("users.id"), nullable=False, index=True)
    location = Column(String, default="")
    vehicle_type = Column(String, default="")
    capacity = Column(Float, nullable=False)
    price_per_km = Column(Float, nullable=False)
    availability = Column(String, nullable=False, default="Available")
    description = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    feature_rows = relationship(
        "TransportFeature", cascade="all, delete-orphan", order_by="TransportFeature.id", lazy="selectin"
    )

    @property
    def features(self):
        return [f.name for f in self.feature_rows]

    @features.setter
    def features(self, names):
        self.feature_rows = [TransportFeature(name=n) for n in names or []]


class TransportFeature(Base):
    __tablename__ = "transport_features"
    id = Column(Integer, primary_key=True)
    transport_id = Column(Integer, ForeignKey("transport.id"), nullable=False, index=True)
    name = Column(String, nullable=False)


class StorageBooking(Base):
    __tablename__ = "storage_bookings"
    id = Column(Integer, primary_key=True, index=True)
    storage = Column("storage_id", Integer, ForeignKey("storage.id"), nullable=False, index=True)
    farmer = Column("farmer_id", Integer, ForeignKey("users.id"), nullable=False, index=True)
    crop = Column("crop_id", Integer, ForeignKey("crops.id"), nullable=False)
    quantity = Column(Float, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = _enum_column(BookingStatus, default=BookingStatus.PENDING, nullable=False, index=True)
    total_price = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TransportBooking(Base):
    __tablename__ = "transport_bookings"
    id = Column(Integer, primary_key=True, index=True)
    transport = Column("transport_id", Integer, ForeignKey("transport.id"), nullable=False, index=True)
    user = Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True)
    crop = Column("crop_id", Integer, ForeignKey("crops.id"), nullable=True)
    pickup_location = Column(String, nullable=False)
    delivery_location = Column(String, nullable=False)
    distance = Column(Float, nullable=False)
    quantity = Column(Float, default=0)
    date = Column(DateTime, nullable=False)
    status = _enum_column(BookingStatus, default=BookingStatus.PENDING, nullable=False, index=True)
    total_price = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

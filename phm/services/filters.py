# PHM/backend/phm/services/filters.py : query filters for the list endpoints

from dataclasses import dataclass
from typing import Optional, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from phm.models import models


def _text_match(column, value: str):
    """Case-insensitive substring match; % and _ in value are literal"""
    return func.lower(column).contains(value.lower(), autoescape=True)


class QueryFilter:
    """
    Optional criteria combined with AND. Criteria left at None are ignored,
    so an empty filter matches the whole collection.
    """

    model = None

    def conditions(self) -> List:
        raise NotImplementedError

    def find_all(self, db: Session):
        """Every matching row, in insertion order, no limit"""
        return db.query(self.model).filter(*self.conditions()).order_by(self.model.id).all()


@dataclass
class CropFilter(QueryFilter):
    farmer: Optional[int] = None
    name: Optional[str] = None
    location: Optional[str] = None
    quality: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    status: Optional[models.CropStatus] = None

    model = models.Crop

    def conditions(self):
        Crop = models.Crop
        conds = []
        if self.farmer is not None:
            conds.append(Crop.farmer == self.farmer)
        if self.name:
            conds.append(_text_match(Crop.name, self.name))
        if self.location:
            conds.append(_text_match(Crop.location, self.location))
        if self.quality:
            conds.append(Crop.quality == self.quality)
        if self.min_price is not None:
            conds.append(Crop.price >= self.min_price)
        if self.max_price is not None:
            conds.append(Crop.price <= self.max_price)
        if self.status is not None:
            conds.append(Crop.status == self.status)
        return conds


@dataclass
class StorageFilter(QueryFilter):
    provider: Optional[int] = None
    name: Optional[str] = None
    location: Optional[str] = None
    feature: Optional[str] = None
    min_available: Optional[float] = None
    max_price: Optional[float] = None

    model = models.Storage

    def conditions(self):
        Storage = models.Storage
        conds = []
        if self.provider is not None:
            conds.append(Storage.provider == self.provider)
        if self.name:
            conds.append(_text_match(Storage.name, self.name))
        if self.location:
            conds.append(_text_match(Storage.location, self.location))
        if self.feature:
            conds.append(Storage.feature_rows.any(models.StorageFeature.name == self.feature))
        if self.min_available is not None:
            conds.append(Storage.available >= self.min_available)
        if self.max_price is not None:
            conds.append(Storage.price_per_ton <= self.max_price)
        return conds


@dataclass
class TransportFilter(QueryFilter):
    provider: Optional[int] = None
    name: Optional[str] = None
    location: Optional[str] = None
    vehicle_type: Optional[str] = None
    feature: Optional[str] = None
    min_capacity: Optional[float] = None
    max_price: Optional[float] = None
    availability: Optional[str] = None

    model = models.Transport

    def conditions(self):
        Transport = models.Transport
        conds = []
        if self.provider is not None:
            conds.append(Transport.provider == self.provider)
        if self.name:
            conds.append(_text_match(Transport.name, self.name))
        if self.location:
            conds.append(_text_match(Transport.location, self.location))
        if self.vehicle_type:
            conds.append(Transport.vehicle_type == self.vehicle_type)
        if self.feature:
            conds.append(Transport.feature_rows.any(models.TransportFeature.name == self.feature))
        if self.min_capacity is not None:
            conds.append(Transport.capacity >= self.min_capacity)
        if self.max_price is not None:
            conds.append(Transport.price_per_km <= self.max_price)
        if self.availability:
            conds.append(Transport.availability == self.availability)
        return conds


@dataclass
class StorageBookingFilter(QueryFilter):
    farmer: Optional[int] = None
    storage: Optional[int] = None
    status: Optional[models.BookingStatus] = None

    model = models.StorageBooking

    def conditions(self):
        Booking = models.StorageBooking
        conds = []
        if self.farmer is not None:
            conds.append(Booking.farmer == self.farmer)
        if self.storage is not None:
            conds.append(Booking.storage == self.storage)
        if self.status is not None:
            conds.append(Booking.status == self.status)
        return conds


@dataclass
class TransportBookingFilter(QueryFilter):
    user: Optional[int] = None
    transport: Optional[int] = None
    status: Optional[models.BookingStatus] = None

    model = models.TransportBooking

    def conditions(self):
        Booking = models.TransportBooking
        conds = []
        if self.user is not None:
            conds.append(Booking.user == self.user)
        if self.transport is not None:
            conds.append(Booking.transport == self.transport)
        if self.status is not None:
            conds.append(Booking.status == self.status)
        return conds

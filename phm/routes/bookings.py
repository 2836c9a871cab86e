# PHM/backend/phm/routes/bookings.py

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from phm.auth import get_current_user
from phm.database import get_db
from phm.models import models as db_models
from phm.models.models import BookingStatus
from phm.schemas import schemas
from phm.services.booking_service import BookingService
from phm.services.filters import StorageBookingFilter, TransportBookingFilter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])

# URL action -> target status
ACTIONS = {
    "confirm": BookingStatus.CONFIRMED,
    "cancel": BookingStatus.CANCELLED,
    "complete": BookingStatus.COMPLETED,
}


def _created(booking, message):
    return {
        "message": message,
        "booking_id": booking.id,
        "total_price": booking.total_price,
        "status": booking.status,
    }


# ========== STORAGE ==========

@router.post("/storage", response_model=schemas.BookingCreated, status_code=201)
def create_storage_booking(booking: schemas.StorageBookingCreate, db: Session = Depends(get_db)):
    """Reserve storage space; the quantity is taken off the facility's available capacity"""
    new_booking = BookingService(db).create_storage_booking(booking)
    return _created(new_booking, "Storage booking created successfully")


@router.get("/storage", response_model=List[schemas.StorageBookingOut])
def list_storage_bookings(
    farmer: Optional[int] = None,
    storage: Optional[int] = None,
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db)
):
    criteria = StorageBookingFilter(farmer=farmer, storage=storage, status=status)
    bookings = criteria.find_all(db)
    logger.debug(f"Bookings API - {len(bookings)} storage bookings for {criteria}")
    return bookings


@router.get("/storage/{booking_id}", response_model=schemas.StorageBookingOut)
def get_storage_booking(booking_id: int, db: Session = Depends(get_db)):
    return BookingService(db).get_storage_booking(booking_id)


def _storage_action(target: BookingStatus):
    def handler(
        booking_id: int,
        db: Session = Depends(get_db),
        current_user: db_models.User = Depends(get_current_user)
    ):
        return BookingService(db).change_storage_booking_status(booking_id, target, current_user)
    return handler


# ========== TRANSPORT ==========

@router.post("/transport", response_model=schemas.BookingCreated, status_code=201)
def create_transport_booking(booking: schemas.TransportBookingCreate, db: Session = Depends(get_db)):
    """Book a vehicle; it stops being bookable until its availability is reset"""
    new_booking = BookingService(db).create_transport_booking(booking)
    return _created(new_booking, "Transport booking created successfully")


@router.get("/transport", response_model=List[schemas.TransportBookingOut])
def list_transport_bookings(
    user: Optional[int] = None,
    transport: Optional[int] = None,
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db)
):
    criteria = TransportBookingFilter(user=user, transport=transport, status=status)
    bookings = criteria.find_all(db)
    logger.debug(f"Bookings API - {len(bookings)} transport bookings for {criteria}")
    return bookings


@router.get("/transport/{booking_id}", response_model=schemas.TransportBookingOut)
def get_transport_booking(booking_id: int, db: Session = Depends(get_db)):
    return BookingService(db).get_transport_booking(booking_id)


def _transport_action(target: BookingStatus):
    def handler(
        booking_id: int,
        db: Session = Depends(get_db),
        current_user: db_models.User = Depends(get_current_user)
    ):
        return BookingService(db).change_transport_booking_status(booking_id, target, current_user)
    return handler


for action, target in ACTIONS.items():
    router.add_api_route(
        f"/storage/{{booking_id}}/{action}",
        _storage_action(target),
        methods=["POST"],
        response_model=schemas.StorageBookingOut,
        name=f"{action}_storage_booking",
    )
    router.add_api_route(
        f"/transport/{{booking_id}}/{action}",
        _transport_action(target),
        methods=["POST"],
        response_model=schemas.TransportBookingOut,
        name=f"{action}_transport_booking",
    )

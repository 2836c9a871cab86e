# PHM/backend/phm/services/booking_service.py : storage and transport reservations

import logging
from datetime import datetime
from sqlalchemy.orm import Session
from phm import config
from phm.constants import AVAILABLE, BOOKED_MARKER
from phm.errors import NotFound, Forbidden, InsufficientCapacity, VehicleUnavailable
from phm.models import models
from phm.models.models import BookingStatus
from phm.services import pricing
from phm.services.booking_states import INITIAL_STATUS, transition

logger = logging.getLogger(__name__)

# Transitions reserved to the provider of the booked resource
PROVIDER_ONLY = {BookingStatus.CONFIRMED, BookingStatus.COMPLETED}


def booked_marker(day: datetime) -> str:
    return BOOKED_MARKER.format(month=day.month, day=day.day, year=day.year)


class BookingService:
    """
    Creates bookings and keeps the capacity ledger of the booked resource.

    Creating a booking is two writes: the booking row, then the capacity
    update on the resource. They are committed separately and the capacity
    check is not locked, so concurrent requests can over-book.
    """

    def __init__(self, db: Session, restore_capacity_on_cancel: bool = None):
        self.db = db
        if restore_capacity_on_cancel is None:
            restore_capacity_on_cancel = config.RESTORE_CAPACITY_ON_CANCEL
        self.restore_capacity_on_cancel = restore_capacity_on_cancel

    def _get(self, model, object_id, label):
        obj = self.db.get(model, object_id)
        if obj is None:
            raise NotFound(f"{label} not found")
        return obj

    # ---------- STORAGE ----------

    def create_storage_booking(self, data) -> models.StorageBooking:
        storage = self._get(models.Storage, data.storage, "Storage facility")
        self._get(models.User, data.farmer, "Farmer")
        self._get(models.Crop, data.crop, "Crop")

        if data.quantity > storage.available:
            logger.info(
                f"Storage {storage.id}: {data.quantity} requested, {storage.available} available"
            )
            raise InsufficientCapacity(data.quantity, storage.available)

        total_price = pricing.storage_price(
            storage.price_per_ton, data.quantity, data.start_date, data.end_date
        )

        booking = models.StorageBooking(
            storage=storage.id,
            farmer=data.farmer,
            crop=data.crop,
            quantity=data.quantity,
            start_date=data.start_date,
            end_date=data.end_date,
            status=INITIAL_STATUS,
            total_price=total_price,
        )
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)

        self._adjust_available(storage.id, -data.quantity)
        logger.info(f"✅ Storage booking {booking.id} created on storage {storage.id}")
        return booking

    def _adjust_available(self, storage_id: int, delta: float):
        # Relative UPDATE, applied by the database in one statement
        self.db.query(models.Storage).filter(models.Storage.id == storage_id).update(
            {models.Storage.available: models.Storage.available + delta},
            synchronize_session=False,
        )
        self.db.commit()

    def get_storage_booking(self, booking_id: int) -> models.StorageBooking:
        return self._get(models.StorageBooking, booking_id, "Storage booking")

    def change_storage_booking_status(self, booking_id: int, target: BookingStatus, actor: models.User):
        booking = self.get_storage_booking(booking_id)
        storage = self._get(models.Storage, booking.storage, "Storage facility")
        self._check_actor(actor, target, provider_id=storage.provider, requester_id=booking.farmer)

        self._apply(booking, target)
        if target == BookingStatus.CANCELLED and self.restore_capacity_on_cancel:
            self._adjust_available(storage.id, booking.quantity)
            self.db.refresh(booking)
        return booking

    # ---------- TRANSPORT ----------

    def create_transport_booking(self, data) -> models.TransportBooking:
        transport = self._get(models.Transport, data.transport, "Transport provider")
        self._get(models.User, data.user, "User")
        if data.crop is not None:
            self._get(models.Crop, data.crop, "Crop")

        if transport.availability != AVAILABLE:
            logger.info(f"Transport {transport.id} is not bookable: {transport.availability!r}")
            raise VehicleUnavailable(transport.availability)

        total_price = pricing.transport_price(transport.price_per_km, data.distance)

        booking = models.TransportBooking(
            transport=transport.id,
            user=data.user,
            crop=data.crop,
            pickup_location=data.pickup_location,
            delivery_location=data.delivery_location,
            distance=data.distance,
            quantity=data.quantity,
            date=data.date,
            status=INITIAL_STATUS,
            total_price=total_price,
        )
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)

        self._set_availability(transport.id, booked_marker(data.date))
        logger.info(f"✅ Transport booking {booking.id} created on transport {transport.id}")
        return booking

    def _set_availability(self, transport_id: int, availability: str):
        self.db.query(models.Transport).filter(models.Transport.id == transport_id).update(
            {models.Transport.availability: availability},
            synchronize_session=False,
        )
        self.db.commit()

    def get_transport_booking(self, booking_id: int) -> models.TransportBooking:
        return self._get(models.TransportBooking, booking_id, "Transport booking")

    def change_transport_booking_status(self, booking_id: int, target: BookingStatus, actor: models.User):
        booking = self.get_transport_booking(booking_id)
        transport = self._get(models.Transport, booking.transport, "Transport provider")
        self._check_actor(actor, target, provider_id=transport.provider, requester_id=booking.user)

        self._apply(booking, target)
        if target == BookingStatus.CANCELLED and self.restore_capacity_on_cancel:
            self._set_availability(transport.id, AVAILABLE)
            self.db.refresh(booking)
        return booking

    # ---------- STATUS ----------

    def _check_actor(self, actor, target, provider_id, requester_id):
        allowed = {provider_id} if target in PROVIDER_ONLY else {provider_id, requester_id}
        if actor.id not in allowed:
            raise Forbidden("You are not allowed to change this booking")

    def _apply(self, booking, target: BookingStatus):
        booking.status = transition(booking.status, target)
        booking.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Booking {booking.id} is now {target.value}")

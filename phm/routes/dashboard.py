# PHM/backend/phm/routes/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session
from phm.auth import get_current_user
from phm.constants import AVAILABLE, DASHBOARD_VARIANTS
from phm.database import get_db
from phm.models import models as db_models
from phm.models.models import CropStatus
from phm.schemas.schemas import DashboardOut

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _count_by_status(query) -> dict:
    counts = {}
    for booking in query.all():
        key = booking.status.value
        counts[key] = counts.get(key, 0) + 1
    return counts


def farmer_buyer_summary(db: Session, user: db_models.User) -> dict:
    crops = db.query(db_models.Crop).filter(db_models.Crop.farmer == user.id).all()
    storage_bookings = db.query(db_models.StorageBooking).filter(db_models.StorageBooking.farmer == user.id)
    transport_bookings = db.query(db_models.TransportBooking).filter(db_models.TransportBooking.user == user.id)
    return {
        "crops": len(crops),
        "crops_available": sum(1 for c in crops if c.status == CropStatus.AVAILABLE),
        "storage_bookings": _count_by_status(storage_bookings),
        "transport_bookings": _count_by_status(transport_bookings),
    }


def storage_provider_summary(db: Session, user: db_models.User) -> dict:
    facilities = db.query(db_models.Storage).filter(db_models.Storage.provider == user.id).all()
    bookings = db.query(db_models.StorageBooking).join(db_models.Storage).filter(
        db_models.Storage.provider == user.id
    )
    total_capacity = sum(f.capacity for f in facilities)
    total_available = sum(f.available for f in facilities)
    return {
        "facilities": len(facilities),
        "total_capacity": total_capacity,
        "total_available": total_available,
        "occupancy_rate": ((total_capacity - total_available) / total_capacity * 100) if total_capacity > 0 else 0,
        "bookings": _count_by_status(bookings),
    }


def transporter_summary(db: Session, user: db_models.User) -> dict:
    vehicles = db.query(db_models.Transport).filter(db_models.Transport.provider == user.id).all()
    bookings = db.query(db_models.TransportBooking).join(db_models.Transport).filter(
        db_models.Transport.provider == user.id
    )
    return {
        "vehicles": len(vehicles),
        "vehicles_available": sum(1 for v in vehicles if v.availability == AVAILABLE),
        "bookings": _count_by_status(bookings),
    }


def cooperative_summary(db: Session, user: db_models.User) -> dict:
    return {
        "crops_available": db.query(func.count(db_models.Crop.id)).filter(
            db_models.Crop.status == CropStatus.AVAILABLE
        ).scalar(),
        "storage_facilities": db.query(func.count(db_models.Storage.id)).scalar(),
        "storage_available": db.query(func.coalesce(func.sum(db_models.Storage.available), 0)).scalar(),
        "transport_vehicles": db.query(func.count(db_models.Transport.id)).scalar(),
    }


SUMMARIES = {
    "farmer-buyer": farmer_buyer_summary,
    "storage-provider": storage_provider_summary,
    "transporter": transporter_summary,
    "cooperative": cooperative_summary,
}


@router.get("/", response_model=DashboardOut)
def dashboard(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(get_current_user)
):
    """Dashboard variant for the user's type, with its summary figures"""
    variant = DASHBOARD_VARIANTS[current_user.user_type.value]
    return {
        "variant": variant,
        "path": f"/dashboard/{variant}",
        "user": current_user,
        "summary": SUMMARIES[variant](db, current_user),
    }

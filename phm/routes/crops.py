# PHM/backend/phm/routes/crops.py

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from phm.database import get_db
from phm.errors import NotFound, Conflict
from phm.models import models as db_models
from phm.models.models import CropStatus
from phm.schemas import schemas
from phm.services.filters import CropFilter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/crops", tags=["crops"])


def _get_crop(db: Session, crop_id: int) -> db_models.Crop:
    crop = db.get(db_models.Crop, crop_id)
    if not crop:
        raise NotFound("Crop not found")
    return crop


@router.get("/", response_model=List[schemas.CropOut])
def list_crops(
    farmer: Optional[int] = None,
    name: Optional[str] = None,
    location: Optional[str] = None,
    quality: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    status: Optional[CropStatus] = None,
    db: Session = Depends(get_db)
):
    """Marketplace listing, every filter optional"""
    criteria = CropFilter(
        farmer=farmer, name=name, location=location, quality=quality,
        min_price=min_price, max_price=max_price, status=status,
    )
    logger.debug(f"Crops API - filter {criteria}")
    crops = criteria.find_all(db)
    logger.debug(f"Crops API - Found {len(crops)} crops")
    return crops


@router.post("/", response_model=schemas.CropCreated, status_code=201)
def create_crop(crop: schemas.CropCreate, db: Session = Depends(get_db)):
    if not db.get(db_models.User, crop.farmer):
        raise NotFound("Farmer not found")

    new_crop = db_models.Crop(**crop.model_dump(), status=CropStatus.AVAILABLE)
    db.add(new_crop)
    db.commit()
    db.refresh(new_crop)
    logger.info(f"✅ Crop {new_crop.id} added by farmer {new_crop.farmer}")
    return {"message": "Crop added successfully", "crop_id": new_crop.id}


@router.get("/{crop_id}", response_model=schemas.CropOut)
def get_crop(crop_id: int, db: Session = Depends(get_db)):
    return _get_crop(db, crop_id)


@router.put("/{crop_id}", response_model=schemas.CropOut)
def update_crop(crop_id: int, update: schemas.CropUpdate, db: Session = Depends(get_db)):
    """Partial update; only the fields present in the body change"""
    crop = _get_crop(db, crop_id)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(crop, field, value)
    db.commit()
    db.refresh(crop)
    return crop


@router.delete("/{crop_id}")
def delete_crop(crop_id: int, db: Session = Depends(get_db)):
    crop = _get_crop(db, crop_id)
    booked = (
        db.query(db_models.StorageBooking).filter(db_models.StorageBooking.crop == crop_id).first()
        or db.query(db_models.TransportBooking).filter(db_models.TransportBooking.crop == crop_id).first()
    )
    if booked:
        raise Conflict("Crop is referenced by a booking and cannot be deleted")
    db.delete(crop)
    db.commit()
    return {"message": "Crop deleted successfully"}

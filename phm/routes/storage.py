# PHM/backend/phm/routes/storage.py

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from phm.database import get_db
from phm.errors import NotFound
from phm.models import models as db_models
from phm.schemas import schemas
from phm.services.filters import StorageFilter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storage", tags=["storage"])


@router.get("/", response_model=List[schemas.StorageOut])
def list_storage(
    provider: Optional[int] = None,
    name: Optional[str] = None,
    location: Optional[str] = None,
    feature: Optional[str] = None,
    min_available: Optional[float] = Query(None, alias="minAvailable"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    db: Session = Depends(get_db)
):
    criteria = StorageFilter(
        provider=provider, name=name, location=location, feature=feature,
        min_available=min_available, max_price=max_price,
    )
    logger.debug(f"Storage API - filter {criteria}")
    storages = criteria.find_all(db)
    logger.debug(f"Storage API - Found {len(storages)} storage facilities")
    return storages


@router.post("/", response_model=schemas.StorageCreated, status_code=201)
def create_storage(storage: schemas.StorageCreate, db: Session = Depends(get_db)):
    """Register a facility; all of its capacity starts available"""
    if not db.get(db_models.User, storage.provider):
        raise NotFound("Provider not found")

    new_storage = db_models.Storage(**storage.model_dump(), available=storage.capacity)
    db.add(new_storage)
    db.commit()
    db.refresh(new_storage)
    logger.info(f"✅ Storage facility {new_storage.id} added by provider {new_storage.provider}")
    return {"message": "Storage facility added successfully", "storage_id": new_storage.id}


@router.get("/{storage_id}", response_model=schemas.StorageOut)
def get_storage(storage_id: int, db: Session = Depends(get_db)):
    storage = db.get(db_models.Storage, storage_id)
    if not storage:
        raise NotFound("Storage facility not found")
    return storage

# PHM/backend/phm/routes/transport.py

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from phm.constants import AVAILABLE
from phm.database import get_db
from phm.errors import NotFound
from phm.models import models as db_models
from phm.schemas import schemas
from phm.services.filters import TransportFilter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transport", tags=["transport"])


@router.get("/", response_model=List[schemas.TransportOut])
def list_transport(
    provider: Optional[int] = None,
    name: Optional[str] = None,
    location: Optional[str] = None,
    vehicle_type: Optional[str] = Query(None, alias="vehicleType"),
    feature: Optional[str] = None,
    min_capacity: Optional[float] = Query(None, alias="minCapacity"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    availability: Optional[str] = None,
    db: Session = Depends(get_db)
):
    criteria = TransportFilter(
        provider=provider, name=name, location=location, vehicle_type=vehicle_type,
        feature=feature, min_capacity=min_capacity, max_price=max_price,
        availability=availability,
    )
    logger.debug(f"Transport API - filter {criteria}")
    vehicles = criteria.find_all(db)
    logger.debug(f"Transport API - Found {len(vehicles)} transport providers")
    return vehicles


@router.post("/", response_model=schemas.TransportCreated, status_code=201)
def create_transport(transport: schemas.TransportCreate, db: Session = Depends(get_db)):
    """Register a vehicle; it starts bookable"""
    if not db.get(db_models.User, transport.provider):
        raise NotFound("Provider not found")

    new_transport = db_models.Transport(**transport.model_dump(), availability=AVAILABLE)
    db.add(new_transport)
    db.commit()
    db.refresh(new_transport)
    logger.info(f"✅ Transport {new_transport.id} added by provider {new_transport.provider}")
    return {"message": "Transport provider added successfully", "transport_id": new_transport.id}


@router.get("/{transport_id}", response_model=schemas.TransportOut)
def get_transport(transport_id: int, db: Session = Depends(get_db)):
    transport = db.get(db_models.Transport, transport_id)
    if not transport:
        raise NotFound("Transport provider not found")
    return transport

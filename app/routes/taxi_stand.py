import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app import audit, config
from app.authz import Action, authorize
from app.constants.enums import AuditAction
from app.database import get_db, transaction
from app.db.crud import location as location_crud
from app.db.crud import taxi_stand as taxi_stand_crud
from app.db.models.taxi_stand import TaxiStand as TaxiStandModel
from app.db.schemas.taxi_stand import (
    TaxiStand,
    TaxiStandCreate,
    TaxiStandUpdate,
    NearbyStandsQuery,
    NearbyTaxiStand,
)
from app.dependencies import CurrentUser, city_admins, get_current_user
from app.errors import NotFoundError
from app.utils.geo import distance_meters

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/taxi-stands",
    tags=["taxi-stands"]
)

def load_taxi_stand(db: Session, stand_id: int) -> TaxiStandModel:
    stand = taxi_stand_crud.get_taxi_stand(db, stand_id)
    if not stand:
        raise NotFoundError("Taxi stand not found")
    return stand

@router.post("/", response_model=TaxiStand, status_code=201)
def create_taxi_stand(
    stand_in: TaxiStandCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(city_admins),
):
    """Create a taxi stand at the given coordinates"""
    authorize(current_user, Action.CREATE, TaxiStandModel())
    with transaction(db):
        location = location_crud.create_location(
            db, {**stand_in.location.model_dump(), "city": "", "country": ""}
        )
        stand = taxi_stand_crud.create_taxi_stand(
            db, location.id, stand_in.model_dump(exclude={"location"})
        )
        audit.record(
            db, current_user, AuditAction.CREATE, "TaxiStand", stand.id, None, audit.snapshot(stand, "location")
        )
    return stand

@router.get("/", response_model=List[TaxiStand])
def list_taxi_stands(
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(city_admins),
):
    """List taxi stands"""
    return taxi_stand_crud.get_taxi_stands(db, is_active=is_active)

@router.post("/nearby", response_model=List[NearbyTaxiStand])
def get_nearby_taxi_stands(
    point: NearbyStandsQuery,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Taxi stands within the nearby radius of a point, closest first"""
    nearby = []
    for stand in taxi_stand_crud.get_taxi_stands(db):
        # cut-off applies to the reported distance, rounded to centimeters
        distance = round(distance_meters(
            point.latitude, point.longitude, stand.location.latitude, stand.location.longitude
        ), 2)
        if distance < config.NEARBY_STAND_RADIUS_METERS:
            nearby.append((distance, stand))
    nearby.sort(key=lambda item: item[0])

    return [
        NearbyTaxiStand(**TaxiStand.model_validate(stand).model_dump(), distance=distance)
        for distance, stand in nearby
    ]

@router.get("/{stand_id}", response_model=TaxiStand)
def get_taxi_stand(
    stand_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(city_admins),
):
    """Get a specific taxi stand"""
    return load_taxi_stand(db, stand_id)

@router.put("/{stand_id}", response_model=TaxiStand)
def update_taxi_stand(
    stand_id: int,
    stand_in: TaxiStandUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(city_admins),
):
    """Update a taxi stand and, optionally, its location"""
    stand = load_taxi_stand(db, stand_id)
    authorize(current_user, Action.UPDATE, stand)

    before = audit.snapshot(stand, "location")
    with transaction(db):
        if stand_in.location is not None:
            location_crud.update_location(db, stand.location, stand_in.location.model_dump(exclude_unset=True))
        taxi_stand_crud.update_taxi_stand(db, stand, stand_in.model_dump(exclude_unset=True, exclude={"location"}))
        audit.record(
            db, current_user, AuditAction.UPDATE, "TaxiStand", stand.id, before, audit.snapshot(stand, "location")
        )
    return stand

@router.delete("/{stand_id}")
def delete_taxi_stand(
    stand_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(city_admins),
):
    """Delete a taxi stand"""
    stand = load_taxi_stand(db, stand_id)
    authorize(current_user, Action.DELETE, stand)

    before = audit.snapshot(stand, "location")
    with transaction(db):
        taxi_stand_crud.delete_taxi_stand(db, stand)
        audit.record(db, current_user, AuditAction.DELETE, "TaxiStand", stand_id, before, None)

    logger.info(f"Taxi stand {stand_id} deleted by user {current_user.id}")
    return {"message": "Taxi stand deleted successfully"}

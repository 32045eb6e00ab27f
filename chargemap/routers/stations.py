"""
Stations Router: CRUD plus radius search.

GET /station?latitude=..&longitude=..&radiusKm=.. returns stations within
the radius, nearest first.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import StationIn, StationOut, DeletedResponse
from ..services.station_service import StationService, IncorrectStationFormatError
from ..validation import ensure_valid, validate_station, validate_radius_search

router = APIRouter(prefix="/station", tags=["stations"])


@router.post("", response_model=StationOut, status_code=status.HTTP_201_CREATED)
def create_station(req: StationIn, db: Session = Depends(get_db)):
    ensure_valid(
        validate_station(req.name, req.latitude, req.longitude),
        IncorrectStationFormatError,
    )

    return StationService.create_station(
        db,
        name=req.name,
        latitude=req.latitude,
        longitude=req.longitude,
        company_id=req.company_id,
    )


@router.get("", response_model=List[StationOut])
def search_stations(
    latitude: float = Query(...),
    longitude: float = Query(...),
    radius_km: float = Query(..., alias="radiusKm"),
    db: Session = Depends(get_db),
):
    """Stations within radiusKm of the point, nearest first."""
    ensure_valid(
        validate_radius_search(latitude, longitude, radius_km),
        IncorrectStationFormatError,
    )

    return StationService.search_in_radius(db, latitude, longitude, radius_km)


@router.get("/{station_id}", response_model=StationOut)
def get_station(station_id: int, db: Session = Depends(get_db)):
    return StationService.get_station(db, station_id)


@router.put("/{station_id}", response_model=StationOut)
def update_station(station_id: int, req: StationIn, db: Session = Depends(get_db)):
    ensure_valid(
        validate_station(req.name, req.latitude, req.longitude),
        IncorrectStationFormatError,
    )

    return StationService.update_station(
        db,
        station_id,
        name=req.name,
        latitude=req.latitude,
        longitude=req.longitude,
        company_id=req.company_id,
    )


@router.delete("/{station_id}", response_model=DeletedResponse)
def delete_station(station_id: int, db: Session = Depends(get_db)):
    StationService.delete_station(db, station_id)
    return DeletedResponse(id=station_id)

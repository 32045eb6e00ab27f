"""
Station Service: CRUD plus the two read queries.

- search_in_radius: stations within a great-circle radius, nearest first
- search_by_company: stations owned by a company or any of its descendants
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..config import settings
from ..db import is_storable_id
from ..models.station import Station
from .company_service import CompanyService
from .errors import NotFoundError, IncorrectFormatError, UnprocessableError
from .geo import haversine_km, latitude_band

logger = logging.getLogger(__name__)


class StationNotFoundError(NotFoundError):
    """No station with the requested id"""

    def __init__(self, station_id: int):
        super().__init__(f"No Station with id {station_id} found")
        self.station_id = station_id


class IncorrectStationFormatError(IncorrectFormatError):
    """Station data is malformed"""

    def __init__(self, message: str):
        super().__init__(f"Incorrect Station format: {message}")


class UnprocessableStationError(UnprocessableError):
    """Station references a company that doesn't exist"""

    def __init__(self, message: str):
        super().__init__(f"Station is unprocessable: {message}")


class StationService:
    """CRUD and geo/ownership queries for stations."""

    @staticmethod
    def create_station(
        db: Session,
        *,
        name: str,
        latitude: float,
        longitude: float,
        company_id: int,
    ) -> Station:
        """Create a station owned by an existing company."""
        if not CompanyService.exists(db, company_id):
            raise UnprocessableStationError(f"Company with id {company_id} doesn't exist")

        station = Station(
            name=name,
            latitude=latitude,
            longitude=longitude,
            company_id=company_id,
        )
        db.add(station)
        db.commit()
        db.refresh(station)
        logger.info(f"Created station {station.id}: {name} at ({latitude}, {longitude}) company={company_id}")
        return station

    @staticmethod
    def get_station(db: Session, station_id: int) -> Station:
        station = None
        if is_storable_id(station_id):
            station = db.query(Station).filter(Station.id == station_id).first()
        if not station:
            raise StationNotFoundError(station_id)
        return station

    @staticmethod
    def update_station(
        db: Session,
        station_id: int,
        *,
        name: str,
        latitude: float,
        longitude: float,
        company_id: int,
    ) -> Station:
        """
        Replace a station's fields.

        The company is only re-checked when it changes.

        Raises:
            StationNotFoundError: station_id doesn't exist
            UnprocessableStationError: the new company doesn't exist
        """
        station = StationService.get_station(db, station_id)

        if station.company_id != company_id and not CompanyService.exists(db, company_id):
            raise UnprocessableStationError(f"Company with id {company_id} doesn't exist")

        station.name = name
        station.latitude = latitude
        station.longitude = longitude
        station.company_id = company_id
        db.commit()
        db.refresh(station)
        logger.info(f"Updated station {station_id}: {name} at ({latitude}, {longitude}) company={company_id}")
        return station

    @staticmethod
    def delete_station(db: Session, station_id: int) -> None:
        station = StationService.get_station(db, station_id)
        db.delete(station)
        db.commit()
        logger.info(f"Deleted station {station_id}")

    @staticmethod
    def search_in_radius_with_distance(
        db: Session,
        latitude: float,
        longitude: float,
        radius_km: float,
        earth_radius_km: Optional[float] = None,
    ) -> List[Tuple[Station, float]]:
        """
        Return (station, distance_km) pairs within radius_km of the point,
        sorted nearest first.

        Input is assumed valid; callers check ranges beforehand.
        """
        if earth_radius_km is None:
            earth_radius_km = settings.earth_radius_km
        min_lat, max_lat = latitude_band(latitude, radius_km, earth_radius_km)

        candidates = (
            db.query(Station)
            .filter(Station.latitude >= min_lat, Station.latitude <= max_lat)
            .order_by(Station.id.asc())
            .all()
        )

        matches = []
        for station in candidates:
            distance_km = haversine_km(
                latitude, longitude,
                station.latitude, station.longitude,
                earth_radius_km,
            )
            if distance_km <= radius_km:
                matches.append((station, distance_km))

        # Stable sort: equal distances keep id order
        matches.sort(key=lambda x: x[1])
        return matches

    @staticmethod
    def search_in_radius(
        db: Session,
        latitude: float,
        longitude: float,
        radius_km: float,
    ) -> List[Station]:
        """Stations within radius_km of (latitude, longitude), nearest first."""
        matches = StationService.search_in_radius_with_distance(db, latitude, longitude, radius_km)
        return [station for station, _ in matches]

    @staticmethod
    def search_by_company(db: Session, company_id: int) -> List[Station]:
        """
        Stations owned by company_id or any of its descendants.

        Raises:
            CompanyNotFoundError: company_id doesn't exist
        """
        CompanyService.get_company(db, company_id)

        company_ids = CompanyService.collect_subtree_ids(db, company_id)
        return (
            db.query(Station)
            .filter(Station.company_id.in_(company_ids))
            .order_by(Station.id.asc())
            .all()
        )

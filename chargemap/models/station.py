"""Charging station model."""
from sqlalchemy import Column, String, Float, ForeignKey, Index
from sqlalchemy.orm import relationship

from ..db import Base, IdType


class Station(Base):
    """A charging location owned by exactly one company"""
    __tablename__ = "stations"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    company_id = Column(
        IdType,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    company = relationship("Company", back_populates="stations")

    __table_args__ = (
        Index("idx_stations_location", "latitude", "longitude"),
    )

    def __repr__(self):
        return f"<Station id={self.id} name={self.name!r} company={self.company_id}>"

"""Request/response schemas for stations (camelCase on the wire)."""
from pydantic import BaseModel, ConfigDict, Field


class StationIn(BaseModel):
    """Body of POST /station and PUT /station/{id}"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    latitude: float
    longitude: float
    company_id: int = Field(..., alias="companyId")


class StationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float
    company_id: int = Field(..., alias="companyId")

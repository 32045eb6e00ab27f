"""Request/response schemas for companies (camelCase on the wire)."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompanyIn(BaseModel):
    """Body of POST /company and PUT /company/{id}"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    parent_company_id: Optional[int] = Field(None, alias="parentCompanyId")


class CompanyOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    parent_company_id: Optional[int] = Field(None, alias="parentCompanyId")

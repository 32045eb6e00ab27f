"""
Companies Router: CRUD over the company hierarchy and the owned-stations query.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import CompanyIn, CompanyOut, StationOut, DeletedResponse
from ..services.company_service import CompanyService, IncorrectCompanyFormatError
from ..services.station_service import StationService
from ..validation import ensure_valid, validate_company

router = APIRouter(prefix="/company", tags=["companies"])


@router.post("", response_model=CompanyOut, status_code=status.HTTP_201_CREATED)
def create_company(req: CompanyIn, db: Session = Depends(get_db)):
    """Create a company, optionally under an existing parent."""
    ensure_valid(validate_company(req.name), IncorrectCompanyFormatError)

    return CompanyService.create_company(
        db,
        name=req.name,
        parent_company_id=req.parent_company_id,
    )


@router.get("", response_model=List[CompanyOut])
def list_companies(db: Session = Depends(get_db)):
    return CompanyService.list_companies(db)


@router.get("/{company_id}", response_model=CompanyOut)
def get_company(company_id: int, db: Session = Depends(get_db)):
    return CompanyService.get_company(db, company_id)


@router.put("/{company_id}", response_model=CompanyOut)
def update_company(company_id: int, req: CompanyIn, db: Session = Depends(get_db)):
    """Replace the company's name and parent link."""
    ensure_valid(validate_company(req.name), IncorrectCompanyFormatError)

    return CompanyService.update_company(
        db,
        company_id,
        name=req.name,
        parent_company_id=req.parent_company_id,
    )


@router.delete("/{company_id}", response_model=DeletedResponse)
def delete_company(company_id: int, db: Session = Depends(get_db)):
    """Delete the company, its descendants and all their stations."""
    CompanyService.delete_company(db, company_id)
    return DeletedResponse(id=company_id)


@router.get("/{company_id}/station", response_model=List[StationOut])
def owned_stations(company_id: int, db: Session = Depends(get_db)):
    """Stations owned by the company or any of its descendants."""
    return StationService.search_by_company(db, company_id)

"""
Company Service: CRUD over the company forest plus subtree expansion.

Parent links are checked on every write: the parent must exist, must not be
the company itself, and must not sit inside the company's own subtree.
"""
import logging
from typing import List, Optional, Set

from sqlalchemy.orm import Session

from ..db import is_storable_id
from ..models.company import Company
from .errors import NotFoundError, IncorrectFormatError, UnprocessableError

logger = logging.getLogger(__name__)


class CompanyNotFoundError(NotFoundError):
    """No company with the requested id"""

    def __init__(self, company_id: int):
        super().__init__(f"No Company with id {company_id} found")
        self.company_id = company_id


class IncorrectCompanyFormatError(IncorrectFormatError):
    """Company data is malformed"""

    def __init__(self, message: str):
        super().__init__(f"Incorrect Company format: {message}")


class UnprocessableCompanyError(UnprocessableError):
    """Company references a parent that doesn't exist"""

    def __init__(self, message: str):
        super().__init__(f"Company is unprocessable: {message}")


class CompanyService:
    """CRUD and hierarchy queries for companies."""

    @staticmethod
    def create_company(
        db: Session,
        *,
        name: str,
        parent_company_id: Optional[int] = None,
    ) -> Company:
        """Create a company, optionally nested under an existing parent."""
        if parent_company_id is not None and not CompanyService.exists(db, parent_company_id):
            raise UnprocessableCompanyError(
                f"Parent company with id {parent_company_id} doesn't exist"
            )

        company = Company(name=name, parent_company_id=parent_company_id)
        db.add(company)
        db.commit()
        db.refresh(company)
        logger.info(f"Created company {company.id}: {name} (parent={parent_company_id})")
        return company

    @staticmethod
    def list_companies(db: Session) -> List[Company]:
        return db.query(Company).order_by(Company.id.asc()).all()

    @staticmethod
    def get_company(db: Session, company_id: int) -> Company:
        company = None
        if is_storable_id(company_id):
            company = db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise CompanyNotFoundError(company_id)
        return company

    @staticmethod
    def exists(db: Session, company_id: int) -> bool:
        if not is_storable_id(company_id):
            return False
        return db.query(Company.id).filter(Company.id == company_id).first() is not None

    @staticmethod
    def update_company(
        db: Session,
        company_id: int,
        *,
        name: str,
        parent_company_id: Optional[int] = None,
    ) -> Company:
        """
        Replace a company's name and parent link.

        Raises:
            CompanyNotFoundError: company_id doesn't exist
            IncorrectCompanyFormatError: the new parent is the company itself
                or one of its descendants
            UnprocessableCompanyError: the new parent doesn't exist
        """
        company = CompanyService.get_company(db, company_id)

        if parent_company_id is not None:
            if parent_company_id == company_id:
                raise IncorrectCompanyFormatError("Company cannot be its own parent")
            if not CompanyService.exists(db, parent_company_id):
                raise UnprocessableCompanyError(
                    f"Parent company with id {parent_company_id} doesn't exist"
                )
            if parent_company_id in CompanyService.collect_subtree_ids(db, company_id):
                raise IncorrectCompanyFormatError(
                    f"Company {parent_company_id} is a descendant of company {company_id} "
                    "and cannot become its parent"
                )

        company.name = name
        company.parent_company_id = parent_company_id
        db.commit()
        db.refresh(company)
        logger.info(f"Updated company {company_id}: {name} (parent={parent_company_id})")
        return company

    @staticmethod
    def delete_company(db: Session, company_id: int) -> None:
        """Delete a company together with its descendants and all their stations."""
        company = CompanyService.get_company(db, company_id)
        db.delete(company)
        db.commit()
        logger.info(f"Deleted company {company_id} and its subtree")

    @staticmethod
    def collect_subtree_ids(db: Session, company_id: int) -> Set[int]:
        """
        Return company_id plus the ids of every transitive descendant.

        Walks the parent-pointer table breadth-first, one query per tree
        level. The visited set keeps the walk finite even if the stored
        parent links contain a cycle.
        """
        visited: Set[int] = {company_id}
        frontier: List[int] = [company_id]

        while frontier:
            rows = (
                db.query(Company.id)
                .filter(Company.parent_company_id.in_(frontier))
                .all()
            )
            frontier = []
            for (child_id,) in rows:
                if child_id not in visited:
                    visited.add(child_id)
                    frontier.append(child_id)

        return visited

"""
Company model.

Companies form a forest through the self-referencing parent pointer.
Deleting a company removes its whole subtree and every station owned by it
(ON DELETE CASCADE on both foreign keys).
"""
from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from ..db import Base, IdType


class Company(Base):
    """An organization that may be nested under a parent company"""
    __tablename__ = "companies"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    parent_company_id = Column(
        IdType,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    # Relationships
    parent = relationship("Company", remote_side=[id], back_populates="children")
    children = relationship(
        "Company",
        back_populates="parent",
        cascade="all, delete",
        passive_deletes=True,
    )
    stations = relationship(
        "Station",
        back_populates="company",
        cascade="all, delete",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Company id={self.id} name={self.name!r} parent={self.parent_company_id}>"

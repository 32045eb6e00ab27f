"""
Tests for CompanyService: CRUD, parent-link checks, cascade delete and
subtree expansion.
"""
import pytest
from sqlalchemy import update

from chargemap.models.company import Company
from chargemap.models.station import Station
from chargemap.services.company_service import (
    CompanyService,
    CompanyNotFoundError,
    IncorrectCompanyFormatError,
    UnprocessableCompanyError,
)


def _find_company(db, company_id):
    return db.query(Company).filter(Company.id == company_id).first()


class TestCompanyServiceCRUD:
    """Tests for company creation, read, update, and listing."""

    def test_create_root_company(self, db):
        """A company without a parent is a root."""
        company = CompanyService.create_company(db, name="Acme Charging")

        assert company.id is not None
        assert company.name == "Acme Charging"
        assert company.parent_company_id is None

    def test_create_child_company(self, db, make_company):
        parent = make_company("Parent")
        child = CompanyService.create_company(db, name="Child", parent_company_id=parent.id)

        assert child.parent_company_id == parent.id

    def test_create_with_unknown_parent(self, db):
        """Referencing a missing parent is unprocessable and writes nothing."""
        with pytest.raises(UnprocessableCompanyError) as exc_info:
            CompanyService.create_company(db, name="Orphan", parent_company_id=9999)

        assert exc_info.value.status_code == 422
        assert exc_info.value.message == (
            "Company is unprocessable: Parent company with id 9999 doesn't exist"
        )
        assert db.query(Company).count() == 0

    def test_get_company(self, db, make_company):
        company = make_company("Ionity")
        found = CompanyService.get_company(db, company.id)
        assert found.id == company.id
        assert found.name == "Ionity"

    def test_get_unknown_company(self, db):
        with pytest.raises(CompanyNotFoundError) as exc_info:
            CompanyService.get_company(db, 424242)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "No Company with id 424242 found"

    def test_oversized_id_is_unknown(self, db, make_company):
        """Ids the key column can't hold are reported as missing, not as driver errors."""
        company = make_company("Real")
        huge = 2**64

        assert not CompanyService.exists(db, huge)
        with pytest.raises(CompanyNotFoundError):
            CompanyService.get_company(db, huge)
        with pytest.raises(UnprocessableCompanyError):
            CompanyService.update_company(db, company.id, name="Real", parent_company_id=huge)

    def test_list_companies_ordered_by_id(self, db, make_company):
        first = make_company("B")
        second = make_company("A")

        ids = [c.id for c in CompanyService.list_companies(db)]
        assert ids == [first.id, second.id]

    def test_update_name_and_parent(self, db, make_company):
        parent = make_company("Parent")
        company = make_company("Old name")

        updated = CompanyService.update_company(
            db, company.id, name="New name", parent_company_id=parent.id
        )

        assert updated.name == "New name"
        assert updated.parent_company_id == parent.id

    def test_update_clears_parent(self, db, make_company):
        """Sending no parent detaches the company without deleting it."""
        parent = make_company("Parent")
        child = make_company("Child", parent=parent)

        CompanyService.update_company(db, child.id, name="Child", parent_company_id=None)

        assert _find_company(db, child.id).parent_company_id is None
        assert _find_company(db, parent.id) is not None

    def test_update_unknown_company(self, db):
        with pytest.raises(CompanyNotFoundError):
            CompanyService.update_company(db, 31337, name="Ghost")

    def test_update_self_parent_rejected(self, db, make_company):
        company = make_company("Loop")

        with pytest.raises(IncorrectCompanyFormatError) as exc_info:
            CompanyService.update_company(db, company.id, name="Loop", parent_company_id=company.id)

        assert exc_info.value.status_code == 400
        assert "Company cannot be its own parent" in exc_info.value.message

    def test_update_unknown_parent(self, db, make_company):
        company = make_company("Lonely")

        with pytest.raises(UnprocessableCompanyError):
            CompanyService.update_company(db, company.id, name="Lonely", parent_company_id=555)

    def test_update_descendant_as_parent_rejected(self, db, make_company):
        """Re-parenting under a grandchild would close a cycle."""
        root = make_company("Root")
        child = make_company("Child", parent=root)
        grandchild = make_company("Grandchild", parent=child)

        with pytest.raises(IncorrectCompanyFormatError):
            CompanyService.update_company(
                db, root.id, name="Root", parent_company_id=grandchild.id
            )

        assert _find_company(db, root.id).parent_company_id is None


class TestCompanyServiceDelete:

    def test_delete_company(self, db, make_company):
        company = make_company("Doomed")
        CompanyService.delete_company(db, company.id)
        assert _find_company(db, company.id) is None

    def test_delete_unknown_company(self, db):
        with pytest.raises(CompanyNotFoundError):
            CompanyService.delete_company(db, 8080)

    def test_delete_cascades_to_subtree_and_stations(self, db, make_company, make_station):
        """Descendants and every station they own go with the company."""
        root = make_company("Root")
        child = make_company("Child", parent=root)
        grandchild = make_company("Grandchild", parent=child)
        other = make_company("Other")

        make_station(root, 1, 1)
        make_station(grandchild, 2, 2)
        survivor = make_station(other, 3, 3)

        CompanyService.delete_company(db, child.id)

        assert _find_company(db, child.id) is None
        assert _find_company(db, grandchild.id) is None
        assert _find_company(db, root.id) is not None
        station_company_ids = sorted(s.company_id for s in db.query(Station).all())
        assert station_company_ids == sorted([root.id, other.id])
        assert db.query(Station).filter(Station.id == survivor.id).first() is not None


class TestCollectSubtreeIds:

    def test_single_company(self, db, make_company):
        company = make_company("Solo")
        assert CompanyService.collect_subtree_ids(db, company.id) == {company.id}

    def test_excludes_ancestors_and_siblings(self, db, make_company):
        root = make_company("Root")
        a = make_company("A", parent=root)
        sibling = make_company("Sibling", parent=root)
        a_child = make_company("A child", parent=a)

        assert CompanyService.collect_subtree_ids(db, a.id) == {a.id, a_child.id}
        assert CompanyService.collect_subtree_ids(db, root.id) == {
            root.id, a.id, sibling.id, a_child.id,
        }

    def test_terminates_on_stored_cycle(self, db, make_company):
        """A cycle written behind the service's back still yields a finite set."""
        a = make_company("A")
        b = make_company("B", parent=a)
        db.execute(update(Company).where(Company.id == a.id).values(parent_company_id=b.id))
        db.flush()

        assert CompanyService.collect_subtree_ids(db, a.id) == {a.id, b.id}
        assert CompanyService.collect_subtree_ids(db, b.id) == {a.id, b.id}

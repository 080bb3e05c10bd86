# =============================================================================
# tests/test_product_service.py - Product Service Tests
# =============================================================================
# Exercises ProductService against the in-memory store.
# =============================================================================

import logging

import pytest

from app.exceptions import NotFoundError, StoreError, ValidationError
from core.models import ProductCreate, ProductFilter, ProductUpdate
from core.services import ProductService


@pytest.fixture
def service(fake_db):
    return ProductService(fake_db)


def _ids(rows):
    return [row["id"] for row in rows]


# =============================================================================
# Reads
# =============================================================================

class TestListAndGet:
    """Test list_products and get_product."""

    def test_list_returns_all_rows(self, service, sample_products):
        assert service.list_products() == sample_products

    def test_list_store_error(self, service, fake_db):
        fake_db.fail("products", "select", message="connection reset")

        with pytest.raises(StoreError) as exc_info:
            service.list_products()

        assert exc_info.value.message == "connection reset"

    def test_get_existing(self, service, sample_products):
        for product in sample_products:
            assert service.get_product(product["id"]) == product

    def test_get_accepts_string_id(self, service):
        assert service.get_product("3")["name"] == "Oak Desk"

    def test_get_missing_is_not_found(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            service.get_product(999)

        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("code", ["22P02", "42501", "XX000"])
    def test_get_other_error_is_not_found(self, service, fake_db, caplog, code):
        """Test that store errors on lookup become 404 and are logged."""
        fake_db.fail("products", "select", message="invalid input syntax for type bigint", code=code)

        with caplog.at_level(logging.ERROR, logger="core.services.product_service"):
            with pytest.raises(NotFoundError) as exc_info:
                service.get_product("abc")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Product not found: abc"
        assert "invalid input syntax" in caplog.text

    def test_get_missing_is_not_logged_as_error(self, service, caplog):
        with caplog.at_level(logging.ERROR, logger="core.services.product_service"):
            with pytest.raises(NotFoundError):
                service.get_product(999)

        assert caplog.records == []


class TestFilter:
    """Test filter_products."""

    def test_no_predicates_returns_everything(self, service, sample_products):
        assert service.filter_products(ProductFilter()) == sample_products

    def test_predicates_are_conjunctive(self, service, sample_products):
        filters = ProductFilter(category="lighting", min_price=10, max_price=30)

        result = service.filter_products(filters)

        expected = [
            p for p in sample_products
            if p["category"] == "lighting" and 10 <= p["price"] <= 30
        ]
        assert result == expected
        assert _ids(result) == [1, 4]

    def test_instock_false(self, service):
        result = service.filter_products(ProductFilter(instock=False))

        assert _ids(result) == [2]

    def test_bounds_are_inclusive(self, service):
        result = service.filter_products(ProductFilter(min_price=15, max_price=15))

        assert _ids(result) == [4, 5]

    def test_price_asc_breaks_ties_by_id(self, service):
        result = service.filter_products(ProductFilter.from_query(sort="price_asc"))

        assert _ids(result) == [4, 5, 1, 2, 3]

    def test_price_desc_breaks_ties_by_id(self, service):
        result = service.filter_products(ProductFilter.from_query(sort="price_desc"))

        assert _ids(result) == [3, 2, 1, 4, 5]

    def test_filter_store_error(self, service, fake_db):
        fake_db.fail("products", "select")

        with pytest.raises(StoreError):
            service.filter_products(ProductFilter(category="lighting"))


class TestSearch:
    """Test search_products."""

    def test_no_name_equals_list(self, service):
        assert service.search_products(None) == service.list_products()
        assert service.search_products("") == service.list_products()

    def test_case_insensitive_substring(self, service):
        result = service.search_products("LAMP")

        assert _ids(result) == [1, 2]

    def test_unanchored_match(self, service):
        assert _ids(service.search_products("des")) == [1, 3]

    def test_search_is_subset_of_list(self, service):
        listed = service.list_products()

        for row in service.search_products("o"):
            assert row in listed

    def test_search_error_carries_message(self, service, fake_db):
        fake_db.fail("products", "select", message="statement timeout")

        with pytest.raises(StoreError) as exc_info:
            service.search_products("lamp")

        assert exc_info.value.message == "statement timeout"


# =============================================================================
# Writes
# =============================================================================

class TestCreate:
    """Test create_product."""

    def test_create_and_read_back(self, service):
        created = service.create_product(
            ProductCreate(name="Sample", category="promo", price=0, instock=False)
        )

        assert created["price"] == 0
        assert created["instock"] is False
        assert service.get_product(created["id"]) == created

    def test_missing_field_rejected_without_insert(self, service, fake_db):
        with pytest.raises(ValidationError) as exc_info:
            service.create_product(ProductCreate(name="Lamp", category="lighting", price=3))

        assert exc_info.value.message == "Missing product fields."
        assert exc_info.value.details == {"missing": ["instock"]}
        assert ("products", "insert") not in fake_db.calls

    def test_insert_error(self, service, fake_db):
        fake_db.fail("products", "insert", message="duplicate key")

        with pytest.raises(StoreError):
            service.create_product(ProductCreate(name="A", category="b", price=1, instock=True))


class TestUpdate:
    """Test update_product."""

    def test_partial_update_keeps_other_fields(self, service, sample_products):
        before = sample_products[0]

        updated = service.update_product(1, ProductUpdate(price=30.0))

        assert updated == {**before, "price": 30.0}
        assert service.get_product(1) == {**before, "price": 30.0}

    def test_update_unknown_id_is_not_an_error(self, service):
        assert service.update_product(999, ProductUpdate(name="Ghost")) is None

    def test_empty_update_returns_current_row(self, service, sample_products, fake_db):
        assert service.update_product(2, ProductUpdate()) == sample_products[1]
        assert ("products", "update") not in fake_db.calls

    def test_empty_update_unknown_id(self, service):
        assert service.update_product(999, ProductUpdate()) is None

    def test_update_error(self, service, fake_db):
        fake_db.fail("products", "update")

        with pytest.raises(StoreError):
            service.update_product(1, ProductUpdate(name="x"))


class TestDelete:
    """Test delete_product."""

    def test_delete_existing(self, service):
        assert service.delete_product(1) == 1

        with pytest.raises(NotFoundError):
            service.get_product(1)

    def test_delete_unknown_id(self, service):
        assert service.delete_product(999) == 0

    def test_delete_error(self, service, fake_db):
        fake_db.fail("products", "delete")

        with pytest.raises(StoreError):
            service.delete_product(1)

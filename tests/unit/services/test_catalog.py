"""Tests for the product and department catalog."""

from decimal import Decimal

import pytest

from nexus_ledger.core.entities import Department, Product, ProductType
from nexus_ledger.core.exceptions import (
    DepartmentNotFoundError,
    DuplicateEntityError,
    ProductNotFoundError,
)
from nexus_ledger.core.services.catalog import Catalog


@pytest.fixture
def catalog():
    return Catalog(
        [Product(id="P2", sku="B-2", name="Bolt"), Product(id="P1", sku="A-1", name="Anchor")],
        [Department(id="D1", name="Workshop", budget_cap=Decimal("100"))],
    )


class TestCatalog:
    def test_products_sorted_by_sku(self, catalog):
        assert [p.id for p in catalog.list_products()] == ["P1", "P2"]

    def test_add_and_get_product(self, catalog):
        catalog.add_product(Product(id="P3", sku="C-3", name="Cable", product_type=ProductType.ASSET))
        assert catalog.get_product("P3").product_type == ProductType.ASSET

    def test_duplicate_product(self, catalog):
        with pytest.raises(DuplicateEntityError):
            catalog.add_product(Product(id="P1", sku="X", name="X"))

    def test_unknown_product(self, catalog):
        with pytest.raises(ProductNotFoundError):
            catalog.get_product("nope")

    def test_departments(self, catalog):
        catalog.add_department(Department(id="D0", name="Admin"))
        assert [d.name for d in catalog.list_departments()] == ["Admin", "Workshop"]
        with pytest.raises(DuplicateEntityError):
            catalog.add_department(Department(id="D1", name="Again"))
        with pytest.raises(DepartmentNotFoundError):
            catalog.get_department("D9")

"""Master data: products and departments."""

from collections.abc import Iterable

from nexus_ledger.config import get_logger
from nexus_ledger.core.entities.inventory import Department, Product
from nexus_ledger.core.exceptions import (
    DepartmentNotFoundError,
    DuplicateEntityError,
    ProductNotFoundError,
)

logger = get_logger(__name__)


class Catalog:
    """Lookup tables the movement recorder validates requests against."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        departments: Iterable[Department] = (),
    ) -> None:
        self.products: dict[str, Product] = {p.id: p for p in products}
        self.departments: dict[str, Department] = {d.id: d for d in departments}

    def add_product(self, product: Product) -> Product:
        if product.id in self.products:
            raise DuplicateEntityError("product", product.id)
        self.products[product.id] = product
        logger.info("product_added", product_id=product.id, type=product.product_type.value)
        return product

    def get_product(self, product_id: str) -> Product:
        product = self.products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def list_products(self) -> list[Product]:
        return sorted(self.products.values(), key=lambda p: p.sku)

    def add_department(self, department: Department) -> Department:
        if department.id in self.departments:
            raise DuplicateEntityError("department", department.id)
        self.departments[department.id] = department
        logger.info("department_added", department_id=department.id)
        return department

    def get_department(self, department_id: str) -> Department:
        department = self.departments.get(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        return department

    def list_departments(self) -> list[Department]:
        return sorted(self.departments.values(), key=lambda d: d.name)

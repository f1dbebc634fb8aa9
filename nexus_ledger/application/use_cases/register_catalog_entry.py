"""Register Catalog Entry Use Cases: products and departments."""

from nexus_ledger.application.dto.requests import CreateDepartmentRequest, CreateProductRequest
from nexus_ledger.application.dto.responses import DepartmentResponse, ProductResponse
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.core.entities import Department, Product
from nexus_ledger.core.interfaces.storage import DEPARTMENTS, PRODUCTS


class RegisterProductUseCase:
    """Add a product to the catalog."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, request: CreateProductRequest) -> Product:
        store = await self._get_ledger_store()
        async with store.locks.hold(f"product:{request.id}"):
            product = store.catalog.add_product(Product(**request.model_dump()))
            await store.flush(PRODUCTS)
        return product

    def to_response(self, product: Product) -> ProductResponse:
        return ProductResponse.model_validate(product)


class RegisterDepartmentUseCase:
    """Add a consuming department with its monthly budget cap."""

    def __init__(self, ledger_store: LedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> LedgerStore:
        if self._ledger_store is None:
            from nexus_ledger.application.services import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, request: CreateDepartmentRequest) -> Department:
        store = await self._get_ledger_store()
        async with store.locks.hold(f"department:{request.id}"):
            department = store.catalog.add_department(Department(**request.model_dump()))
            await store.flush(DEPARTMENTS)
        return department

    def to_response(self, department: Department) -> DepartmentResponse:
        return DepartmentResponse.model_validate(department)

"""Catalog endpoints: products and departments."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status

from nexus_ledger.api.dependencies import (
    get_register_department_use_case,
    get_register_product_use_case,
    get_store,
)
from nexus_ledger.application.dto.requests import CreateDepartmentRequest, CreateProductRequest
from nexus_ledger.application.dto.responses import (
    DepartmentResponse,
    ErrorResponse,
    ProductResponse,
)
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.application.use_cases import RegisterDepartmentUseCase, RegisterProductUseCase
from nexus_ledger.core.entities import Department

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def _department_response(store: LedgerStore, department: Department) -> DepartmentResponse:
    response = DepartmentResponse.model_validate(department)
    response.month_to_date_spend = store.recorder.department_spend(
        department.id, datetime.now(UTC)
    )
    return response


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    use_case: RegisterProductUseCase = Depends(get_register_product_use_case),
) -> ProductResponse:
    """Register a product."""
    product = await use_case.execute(request)
    return use_case.to_response(product)


@router.get("/products", response_model=list[ProductResponse])
async def list_products(store: LedgerStore = Depends(get_store)) -> list[ProductResponse]:
    """All products, by SKU."""
    return [ProductResponse.model_validate(p) for p in store.catalog.list_products()]


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(product_id: str, store: LedgerStore = Depends(get_store)) -> ProductResponse:
    return ProductResponse.model_validate(store.catalog.get_product(product_id))


@router.post(
    "/departments",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_department(
    request: CreateDepartmentRequest,
    use_case: RegisterDepartmentUseCase = Depends(get_register_department_use_case),
) -> DepartmentResponse:
    """Register a consuming department."""
    department = await use_case.execute(request)
    return use_case.to_response(department)


@router.get("/departments", response_model=list[DepartmentResponse])
async def list_departments(store: LedgerStore = Depends(get_store)) -> list[DepartmentResponse]:
    """All departments with their month-to-date consumption spend."""
    return [_department_response(store, d) for d in store.catalog.list_departments()]


@router.get(
    "/departments/{department_id}",
    response_model=DepartmentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_department(
    department_id: str, store: LedgerStore = Depends(get_store)
) -> DepartmentResponse:
    return _department_response(store, store.catalog.get_department(department_id))

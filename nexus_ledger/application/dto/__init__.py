"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from nexus_ledger.application.dto.requests import (
    CreateClientRequest,
    CreateDepartmentRequest,
    CreateProductRequest,
    CreateVendorRequest,
    PostNoteRequest,
    RecordMovementRequest,
    RecordPaymentRequest,
    ReserveStockRequest,
    SalesLinkedPaymentRequest,
    UpdateClientRequest,
    UpdateVendorRequest,
    ValidateOrderRequest,
)
from nexus_ledger.application.dto.responses import (
    AgingReportResponse,
    BalanceCheckResponse,
    ClientResponse,
    CollectionAlertResponse,
    CollectionReportResponse,
    DepartmentResponse,
    ErrorResponse,
    FinancialSummaryResponse,
    FinancialTransactionResponse,
    HealthResponse,
    MovementListResponse,
    MovementRecordResponse,
    OrderValidationResponse,
    ProductResponse,
    RecordMovementResponse,
    SalesLinkedPaymentResponse,
    StatementResponse,
    StockListResponse,
    StockPositionResponse,
    VendorResponse,
)

__all__ = [
    # Requests
    "RecordMovementRequest",
    "ReserveStockRequest",
    "CreateProductRequest",
    "CreateDepartmentRequest",
    "CreateVendorRequest",
    "UpdateVendorRequest",
    "CreateClientRequest",
    "UpdateClientRequest",
    "RecordPaymentRequest",
    "PostNoteRequest",
    "ValidateOrderRequest",
    "SalesLinkedPaymentRequest",
    # Responses
    "StockPositionResponse",
    "MovementRecordResponse",
    "FinancialTransactionResponse",
    "RecordMovementResponse",
    "StockListResponse",
    "MovementListResponse",
    "ProductResponse",
    "DepartmentResponse",
    "VendorResponse",
    "ClientResponse",
    "BalanceCheckResponse",
    "SalesLinkedPaymentResponse",
    "CollectionAlertResponse",
    "AgingReportResponse",
    "CollectionReportResponse",
    "StatementResponse",
    "FinancialSummaryResponse",
    "OrderValidationResponse",
    "ErrorResponse",
    "HealthResponse",
]

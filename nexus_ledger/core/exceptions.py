"""
Domain exceptions for the ledger engine.

Every exception is raised before any stock or balance mutation, so a caller
that catches one can rely on the ledger being unchanged.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Stock Exceptions
class StockError(LedgerError):
    """Base exception for stock quantity violations."""

    pass


class NegativeStockError(StockError):
    """A delta would drive on-hand below zero or reserved above on-hand."""

    def __init__(
        self,
        product_id: str,
        warehouse_id: str,
        on_hand: int,
        reserved: int,
    ):
        super().__init__(
            f"Stock for {product_id} in {warehouse_id} would become invalid "
            f"(on_hand={on_hand}, reserved={reserved})",
            code="NEGATIVE_STOCK",
            details={
                "product_id": product_id,
                "warehouse_id": warehouse_id,
                "on_hand": on_hand,
                "reserved": reserved,
            },
        )


class InsufficientStockError(StockError):
    """Requested quantity exceeds the available quantity at the source."""

    def __init__(
        self,
        product_id: str,
        warehouse_id: str,
        requested: int,
        available: int,
    ):
        super().__init__(
            f"Insufficient stock for {product_id} in {warehouse_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "warehouse_id": warehouse_id,
                "requested": requested,
                "available": available,
            },
        )


class ResaleItemNotConsumableError(StockError):
    """Resale-designated stock cannot be consumed internally."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} is a resale item and cannot be consumed internally",
            code="RESALE_ITEM_NOT_CONSUMABLE",
            details={"product_id": product_id},
        )


# Lookup Exceptions
class EntityNotFoundError(LedgerError):
    """A referenced vendor, client, product or department does not exist."""

    def __init__(self, entity_type: str, entity_id: str, code: str | None = None):
        super().__init__(
            f"{entity_type.capitalize()} not found: {entity_id}",
            code=code or "ENTITY_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


class VendorNotFoundError(EntityNotFoundError):
    def __init__(self, vendor_id: str):
        super().__init__("vendor", vendor_id, code="VENDOR_NOT_FOUND")


class ClientNotFoundError(EntityNotFoundError):
    def __init__(self, client_id: str):
        super().__init__("client", client_id, code="CLIENT_NOT_FOUND")


class ProductNotFoundError(EntityNotFoundError):
    def __init__(self, product_id: str):
        super().__init__("product", product_id, code="PRODUCT_NOT_FOUND")


class DepartmentNotFoundError(EntityNotFoundError):
    def __init__(self, department_id: str):
        super().__init__("department", department_id, code="DEPARTMENT_NOT_FOUND")


class DuplicateEntityError(LedgerError):
    """An entity with the same identifier already exists."""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            f"{entity_type.capitalize()} already exists: {entity_id}",
            code="DUPLICATE_ENTITY",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


# Financial Exceptions
class CreditLimitExceededError(LedgerError):
    """Advisory: the proposed amount would push a balance past its credit limit."""

    def __init__(
        self,
        entity_id: str,
        current_balance: Any,
        proposed_amount: Any,
        credit_limit: Any,
    ):
        super().__init__(
            f"Credit limit exceeded for {entity_id}: balance {current_balance} "
            f"+ {proposed_amount} > limit {credit_limit}",
            code="CREDIT_LIMIT_EXCEEDED",
            details={
                "entity_id": entity_id,
                "current_balance": str(current_balance),
                "proposed_amount": str(proposed_amount),
                "credit_limit": str(credit_limit),
            },
        )


# Validation Exceptions
class ValidationError(LedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Storage Exceptions
class StorageError(LedgerError):
    """Base exception for persistence operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(LedgerError):
    """Configuration error."""

    pass

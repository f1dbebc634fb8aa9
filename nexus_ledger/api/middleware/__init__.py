"""API middleware."""

from nexus_ledger.api.middleware.error_handler import ErrorHandlerMiddleware
from nexus_ledger.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]

"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers that write records.
"""

from marginbook.application.dto import (
    CalcRequest,
    CalcResponse,
    ErrorResponse,
    HealthResponse,
    InvoiceCreateRequest,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceUpdateRequest,
    ReceiptCreateRequest,
    ReceiptListResponse,
    ReceiptResponse,
    ReceiptUpdateRequest,
)
from marginbook.application.services import (
    display_number,
    get_sequence_assigner,
    reset_services,
)
from marginbook.application.use_cases import (
    CreateInvoiceUseCase,
    CreateReceiptUseCase,
    UpdateInvoiceUseCase,
    UpdateReceiptUseCase,
)

__all__ = [
    # Request DTOs
    "CalcRequest",
    "ReceiptCreateRequest",
    "ReceiptUpdateRequest",
    "InvoiceCreateRequest",
    "InvoiceUpdateRequest",
    # Response DTOs
    "CalcResponse",
    "ReceiptResponse",
    "ReceiptListResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "CreateReceiptUseCase",
    "UpdateReceiptUseCase",
    "CreateInvoiceUseCase",
    "UpdateInvoiceUseCase",
    # Service factories
    "get_sequence_assigner",
    "display_number",
    "reset_services",
]

"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from marginbook.application.dto.requests import (
    CalcRequest,
    InvoiceCreateRequest,
    InvoiceUpdateRequest,
    ReceiptCreateRequest,
    ReceiptUpdateRequest,
)
from marginbook.application.dto.responses import (
    CalcResponse,
    DatabaseHealthResponse,
    ErrorResponse,
    HealthResponse,
    InvoiceListResponse,
    InvoiceResponse,
    ReceiptListResponse,
    ReceiptResponse,
)

__all__ = [
    # Requests
    "CalcRequest",
    "ReceiptCreateRequest",
    "ReceiptUpdateRequest",
    "InvoiceCreateRequest",
    "InvoiceUpdateRequest",
    # Responses
    "CalcResponse",
    "ReceiptResponse",
    "ReceiptListResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "HealthResponse",
    "DatabaseHealthResponse",
    "ErrorResponse",
]

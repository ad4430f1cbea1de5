"""
Application use cases.

Each use case orchestrates core services and storage for one API operation.
"""

from marginbook.application.use_cases.create_invoice import (
    CreateInvoiceUseCase,
    InvoiceResult,
    invoice_to_response,
)
from marginbook.application.use_cases.create_receipt import (
    CreateReceiptUseCase,
    ReceiptResult,
    receipt_to_response,
)
from marginbook.application.use_cases.update_invoice import UpdateInvoiceUseCase
from marginbook.application.use_cases.update_receipt import UpdateReceiptUseCase

__all__ = [
    "CreateReceiptUseCase",
    "UpdateReceiptUseCase",
    "ReceiptResult",
    "receipt_to_response",
    "CreateInvoiceUseCase",
    "UpdateInvoiceUseCase",
    "InvoiceResult",
    "invoice_to_response",
]

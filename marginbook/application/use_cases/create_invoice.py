"""Create Invoice Use Case: compute totals and store with the next invoice number."""

from dataclasses import dataclass

from marginbook.application.dto.requests import InvoiceCreateRequest
from marginbook.application.dto.responses import InvoiceResponse
from marginbook.application.services import display_number, get_sequence_assigner
from marginbook.config import get_logger
from marginbook.core.entities import InvoiceData, InvoiceRecord, InvoiceTotals, RecordKind
from marginbook.core.interfaces import IInvoiceStore
from marginbook.core.services import (
    SequenceAssigner,
    compute_invoice_totals,
    format_with_conversion,
)

logger = get_logger(__name__)


@dataclass
class InvoiceResult:
    """Result of creating or updating an invoice."""

    invoice: InvoiceRecord


def invoice_to_response(invoice: InvoiceRecord) -> InvoiceResponse:
    """Convert an InvoiceRecord entity to its response DTO."""
    display_total = None
    # Undecodable columns come back as raw strings
    if isinstance(invoice.payload, InvoiceData) and isinstance(invoice.totals, InvoiceTotals):
        display_total = format_with_conversion(
            invoice.payload.currency, invoice.totals.total, invoice.usd_rate or 0
        )

    return InvoiceResponse(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        display_number=display_number(RecordKind.INVOICE, invoice.invoice_number),
        label=invoice.label,
        usd_rate=invoice.usd_rate,
        payload=invoice.payload,
        totals=invoice.totals,
        display_total=display_total,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


class CreateInvoiceUseCase:
    """Compute totals for an invoice document and persist both."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        sequence_assigner: SequenceAssigner | None = None,
    ):
        self._invoice_store = invoice_store
        self._sequence_assigner = sequence_assigner

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from marginbook.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    def _get_sequence_assigner(self) -> SequenceAssigner:
        if self._sequence_assigner is None:
            self._sequence_assigner = get_sequence_assigner()
        return self._sequence_assigner

    async def execute(self, user_id: str, request: InvoiceCreateRequest) -> InvoiceResult:
        """
        Create an invoice for the user.

        Raises:
            SequenceExhaustedError: If numbering kept conflicting
        """
        store = await self._get_invoice_store()
        assigner = self._get_sequence_assigner()

        totals = compute_invoice_totals(request.invoice)
        invoice = InvoiceRecord(
            user_id=user_id,
            label=request.label,
            usd_rate=request.usd_rate,
            payload=request.invoice,
            totals=totals,
        )

        invoice = await assigner.assign(
            RecordKind.INVOICE,
            user_id,
            lambda: store.create_invoice(invoice),
        )

        logger.info(
            "create_invoice_complete",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total=totals.total,
        )
        return InvoiceResult(invoice=invoice)

    def to_response(self, result: InvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_to_response(result.invoice)

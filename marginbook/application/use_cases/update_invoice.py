"""Update Invoice Use Case."""

from marginbook.application.dto.requests import InvoiceUpdateRequest
from marginbook.application.dto.responses import InvoiceResponse
from marginbook.application.use_cases.create_invoice import InvoiceResult, invoice_to_response
from marginbook.config import get_logger
from marginbook.core.exceptions import InvoiceNotFoundError, ValidationError
from marginbook.core.interfaces import IInvoiceStore
from marginbook.core.services import compute_invoice_totals

logger = get_logger(__name__)


class UpdateInvoiceUseCase:
    """
    Change an invoice and recompute its totals.

    Totals are recomputed on every update, from the new document when one
    is given and from the stored document otherwise.
    """

    def __init__(self, invoice_store: IInvoiceStore | None = None):
        self._invoice_store = invoice_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from marginbook.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def execute(
        self,
        invoice_id: str,
        user_id: str,
        request: InvoiceUpdateRequest,
    ) -> InvoiceResult:
        """
        Apply the update and recompute totals.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist for this user
            ValidationError: If no document is given and the stored one
                cannot be decoded
        """
        store = await self._get_invoice_store()

        invoice = await store.get_invoice(invoice_id, user_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)

        document = request.invoice if request.invoice is not None else invoice.payload
        if isinstance(document, str):
            raise ValidationError(
                "invoice",
                "Stored invoice could not be decoded; send a full invoice to replace it",
            )

        if request.label is not None:
            invoice.label = request.label
        if request.usd_rate is not None:
            invoice.usd_rate = request.usd_rate
        invoice.payload = document
        invoice.totals = compute_invoice_totals(document)

        invoice = await store.update_invoice(invoice)

        logger.info("update_invoice_complete", invoice_id=invoice.id, total=invoice.totals.total)
        return InvoiceResult(invoice=invoice)

    def to_response(self, result: InvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_to_response(result.invoice)

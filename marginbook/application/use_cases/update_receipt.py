"""Update Receipt Use Case."""

from marginbook.application.dto.requests import ReceiptUpdateRequest
from marginbook.application.dto.responses import ReceiptResponse
from marginbook.application.use_cases.create_receipt import ReceiptResult, receipt_to_response
from marginbook.config import get_logger
from marginbook.core.entities import ReceiptPayload
from marginbook.core.exceptions import ReceiptNotFoundError
from marginbook.core.interfaces import IReceiptStore
from marginbook.core.services import compute_calculator

logger = get_logger(__name__)


class UpdateReceiptUseCase:
    """
    Change a receipt's label and, optionally, its calculation.

    A new input replaces the stored input and results together. Without one
    the stored payload is kept as is, even if it is undecodable text.
    """

    def __init__(self, receipt_store: IReceiptStore | None = None):
        self._receipt_store = receipt_store

    async def _get_receipt_store(self) -> IReceiptStore:
        if self._receipt_store is None:
            from marginbook.infrastructure.storage.sqlite import get_receipt_store

            self._receipt_store = await get_receipt_store()
        return self._receipt_store

    async def execute(
        self,
        receipt_id: str,
        user_id: str,
        request: ReceiptUpdateRequest,
    ) -> ReceiptResult:
        store = await self._get_receipt_store()

        receipt = await store.get_receipt(receipt_id, user_id)
        if receipt is None:
            raise ReceiptNotFoundError(receipt_id)

        if request.label is not None:
            receipt.label = request.label
        if request.input is not None:
            receipt.payload = ReceiptPayload(
                input=request.input,
                results=compute_calculator(request.input),
            )

        receipt = await store.update_receipt(receipt)

        logger.info(
            "update_receipt_complete",
            receipt_id=receipt.id,
            recomputed=request.input is not None,
        )
        return ReceiptResult(receipt=receipt)

    def to_response(self, result: ReceiptResult) -> ReceiptResponse:
        """Convert result to API response."""
        return receipt_to_response(result.receipt)

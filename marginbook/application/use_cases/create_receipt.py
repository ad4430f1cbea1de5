"""Create Receipt Use Case: compute a calculation and store it with the next receipt number."""

from dataclasses import dataclass

from marginbook.application.dto.requests import ReceiptCreateRequest
from marginbook.application.dto.responses import ReceiptResponse
from marginbook.application.services import display_number, get_sequence_assigner
from marginbook.config import get_logger
from marginbook.core.entities import Receipt, ReceiptPayload, RecordKind
from marginbook.core.interfaces import IReceiptStore
from marginbook.core.services import SequenceAssigner, compute_calculator

logger = get_logger(__name__)


@dataclass
class ReceiptResult:
    """Result of creating or updating a receipt."""

    receipt: Receipt


def receipt_to_response(receipt: Receipt) -> ReceiptResponse:
    """Convert a Receipt entity to its response DTO."""
    return ReceiptResponse(
        id=receipt.id,
        receipt_number=receipt.receipt_number,
        display_number=display_number(RecordKind.RECEIPT, receipt.receipt_number),
        label=receipt.label,
        payload=receipt.payload,
        created_at=receipt.created_at,
        updated_at=receipt.updated_at,
    )


class CreateReceiptUseCase:
    """Compute results for a calculator input and persist both as a receipt."""

    def __init__(
        self,
        receipt_store: IReceiptStore | None = None,
        sequence_assigner: SequenceAssigner | None = None,
    ):
        self._receipt_store = receipt_store
        self._sequence_assigner = sequence_assigner

    async def _get_receipt_store(self) -> IReceiptStore:
        if self._receipt_store is None:
            from marginbook.infrastructure.storage.sqlite import get_receipt_store

            self._receipt_store = await get_receipt_store()
        return self._receipt_store

    def _get_sequence_assigner(self) -> SequenceAssigner:
        if self._sequence_assigner is None:
            self._sequence_assigner = get_sequence_assigner()
        return self._sequence_assigner

    async def execute(self, user_id: str, request: ReceiptCreateRequest) -> ReceiptResult:
        """
        Create a receipt for the user.

        Results are computed before the numbering transaction starts, so a
        retry never recomputes them.

        Raises:
            SequenceExhaustedError: If numbering kept conflicting
        """
        store = await self._get_receipt_store()
        assigner = self._get_sequence_assigner()

        results = compute_calculator(request.input)
        receipt = Receipt(
            user_id=user_id,
            label=request.label,
            payload=ReceiptPayload(input=request.input, results=results),
        )

        receipt = await assigner.assign(
            RecordKind.RECEIPT,
            user_id,
            lambda: store.create_receipt(receipt),
        )

        logger.info(
            "create_receipt_complete",
            receipt_id=receipt.id,
            receipt_number=receipt.receipt_number,
            margin_pct=round(results.margin_pct, 2),
        )
        return ReceiptResult(receipt=receipt)

    def to_response(self, result: ReceiptResult) -> ReceiptResponse:
        """Convert result to API response."""
        return receipt_to_response(result.receipt)

"""Receipt endpoints: saved margin calculations, numbered per user."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from marginbook.api.dependencies import (
    get_create_receipt_use_case,
    get_current_user,
    get_receipts,
    get_update_receipt_use_case,
)
from marginbook.application.dto.requests import ReceiptCreateRequest, ReceiptUpdateRequest
from marginbook.application.dto.responses import (
    ErrorResponse,
    ReceiptListResponse,
    ReceiptResponse,
)
from marginbook.application.use_cases import (
    CreateReceiptUseCase,
    UpdateReceiptUseCase,
    receipt_to_response,
)
from marginbook.core.entities import User
from marginbook.core.exceptions import ReceiptNotFoundError
from marginbook.core.interfaces import IReceiptStore

router = APIRouter(
    prefix="/api/receipts",
    tags=["receipts"],
    responses={401: {"model": ErrorResponse}},
)


@router.get("", response_model=ReceiptListResponse)
async def list_receipts(
    q: str | None = Query(default=None, description="Case-insensitive label filter"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: User = Depends(get_current_user),
    store: IReceiptStore = Depends(get_receipts),
) -> ReceiptListResponse:
    """List the current user's receipts, highest number first."""
    receipts = await store.list_receipts(user.id, query=q, limit=limit, offset=offset)
    return ReceiptListResponse(
        receipts=[receipt_to_response(r) for r in receipts],
        total=len(receipts),
    )


@router.get(
    "/{receipt_id}",
    response_model=ReceiptResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_receipt(
    receipt_id: str,
    user: User = Depends(get_current_user),
    store: IReceiptStore = Depends(get_receipts),
) -> ReceiptResponse:
    """Get one receipt."""
    receipt = await store.get_receipt(receipt_id, user.id)
    if receipt is None:
        raise ReceiptNotFoundError(receipt_id)
    return receipt_to_response(receipt)


@router.post(
    "",
    response_model=ReceiptResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse, "description": "Numbering busy, retry"},
    },
)
async def create_receipt(
    request: ReceiptCreateRequest,
    user: User = Depends(get_current_user),
    use_case: CreateReceiptUseCase = Depends(get_create_receipt_use_case),
) -> ReceiptResponse:
    """Compute and save a calculation with the next receipt number."""
    result = await use_case.execute(user.id, request)
    return use_case.to_response(result)


@router.put(
    "/{receipt_id}",
    response_model=ReceiptResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_receipt(
    receipt_id: str,
    request: ReceiptUpdateRequest,
    user: User = Depends(get_current_user),
    use_case: UpdateReceiptUseCase = Depends(get_update_receipt_use_case),
) -> ReceiptResponse:
    """Update a receipt's label and optionally its calculation."""
    result = await use_case.execute(receipt_id, user.id, request)
    return use_case.to_response(result)


@router.delete(
    "/{receipt_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_receipt(
    receipt_id: str,
    user: User = Depends(get_current_user),
    store: IReceiptStore = Depends(get_receipts),
) -> Response:
    """Delete a receipt."""
    if not await store.delete_receipt(receipt_id, user.id):
        raise ReceiptNotFoundError(receipt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Invoice endpoints: numbered per user, totals computed server-side."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from marginbook.api.dependencies import (
    get_create_invoice_use_case,
    get_current_user,
    get_invoices,
    get_update_invoice_use_case,
)
from marginbook.application.dto.requests import InvoiceCreateRequest, InvoiceUpdateRequest
from marginbook.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
)
from marginbook.application.use_cases import (
    CreateInvoiceUseCase,
    UpdateInvoiceUseCase,
    invoice_to_response,
)
from marginbook.core.entities import InvoiceData, InvoiceTotals, User
from marginbook.core.exceptions import InvoiceNotFoundError
from marginbook.core.interfaces import IInvoiceStore
from marginbook.core.services import compute_invoice_totals

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
    "/totals",
    response_model=InvoiceTotals,
    responses={422: {"model": ErrorResponse}},
)
async def preview_totals(invoice: InvoiceData) -> InvoiceTotals:
    """Compute totals for an invoice document without storing it."""
    return compute_invoice_totals(invoice)


@router.get(
    "",
    response_model=InvoiceListResponse,
    responses={401: {"model": ErrorResponse}},
)
async def list_invoices(
    q: str | None = Query(default=None, description="Case-insensitive label filter"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user: User = Depends(get_current_user),
    store: IInvoiceStore = Depends(get_invoices),
) -> InvoiceListResponse:
    """List the current user's invoices, highest number first."""
    invoices = await store.list_invoices(user.id, query=q, limit=limit, offset=offset)
    return InvoiceListResponse(
        invoices=[invoice_to_response(i) for i in invoices],
        total=len(invoices),
    )


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: str,
    user: User = Depends(get_current_user),
    store: IInvoiceStore = Depends(get_invoices),
) -> InvoiceResponse:
    """Get one invoice."""
    invoice = await store.get_invoice(invoice_id, user.id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return invoice_to_response(invoice)


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse, "description": "Numbering busy, retry"},
    },
)
async def create_invoice(
    request: InvoiceCreateRequest,
    user: User = Depends(get_current_user),
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Save an invoice with computed totals and the next invoice number."""
    result = await use_case.execute(user.id, request)
    return use_case.to_response(result)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_invoice(
    invoice_id: str,
    request: InvoiceUpdateRequest,
    user: User = Depends(get_current_user),
    use_case: UpdateInvoiceUseCase = Depends(get_update_invoice_use_case),
) -> InvoiceResponse:
    """Update an invoice and recompute its totals."""
    result = await use_case.execute(invoice_id, user.id, request)
    return use_case.to_response(result)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_invoice(
    invoice_id: str,
    user: User = Depends(get_current_user),
    store: IInvoiceStore = Depends(get_invoices),
) -> Response:
    """Delete an invoice."""
    if not await store.delete_invoice(invoice_id, user.id):
        raise InvoiceNotFoundError(invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

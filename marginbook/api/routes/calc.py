"""Stateless margin calculation endpoint."""

from fastapi import APIRouter

from marginbook.application.dto.requests import CalcRequest
from marginbook.application.dto.responses import CalcResponse, ErrorResponse
from marginbook.core.entities import CalcInput
from marginbook.core.services import compute_calculator

router = APIRouter(prefix="/api/calc", tags=["calc"])


@router.post(
    "",
    response_model=CalcResponse,
    responses={422: {"model": ErrorResponse}},
)
async def calculate(request: CalcRequest) -> CalcResponse:
    """Compute margin results for an input without storing anything."""
    calc_input = CalcInput.model_validate(request.model_dump())
    return CalcResponse(input=calc_input, results=compute_calculator(calc_input))

"""
Dependency injection container for FastAPI.

Provides stores, use cases and the authenticated user to route handlers.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marginbook.api.security import decode_access_token
from marginbook.application.use_cases import (
    CreateInvoiceUseCase,
    CreateReceiptUseCase,
    UpdateInvoiceUseCase,
    UpdateReceiptUseCase,
)
from marginbook.config import bind_request_context
from marginbook.core.entities import User
from marginbook.core.exceptions import AuthenticationError
from marginbook.core.interfaces import IInvoiceStore, IReceiptStore, IUserStore
from marginbook.infrastructure.storage.sqlite import (
    get_invoice_store,
    get_receipt_store,
    get_user_store,
)

bearer_scheme = HTTPBearer(auto_error=False)


# Store dependencies
async def get_users() -> IUserStore:
    """Get user store."""
    return await get_user_store()


async def get_receipts() -> IReceiptStore:
    """Get receipt store."""
    return await get_receipt_store()


async def get_invoices() -> IInvoiceStore:
    """Get invoice store."""
    return await get_invoice_store()


# Identity
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    users: IUserStore = Depends(get_users),
) -> User:
    """
    Resolve the bearer token to a stored user.

    Raises:
        AuthenticationError: Missing header, bad token or unknown user
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError()

    claims = decode_access_token(credentials.credentials)
    user = await users.get_user(claims["sub"])
    if user is None:
        raise AuthenticationError("Unknown user")

    bind_request_context(user_id=user.id)
    return user


# Use case dependencies
async def get_create_receipt_use_case(
    receipts: IReceiptStore = Depends(get_receipts),
) -> CreateReceiptUseCase:
    """Get create receipt use case."""
    return CreateReceiptUseCase(receipt_store=receipts)


async def get_update_receipt_use_case(
    receipts: IReceiptStore = Depends(get_receipts),
) -> UpdateReceiptUseCase:
    """Get update receipt use case."""
    return UpdateReceiptUseCase(receipt_store=receipts)


async def get_create_invoice_use_case(
    invoices: IInvoiceStore = Depends(get_invoices),
) -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase(invoice_store=invoices)


async def get_update_invoice_use_case(
    invoices: IInvoiceStore = Depends(get_invoices),
) -> UpdateInvoiceUseCase:
    """Get update invoice use case."""
    return UpdateInvoiceUseCase(invoice_store=invoices)

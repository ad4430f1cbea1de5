"""
Abstract interfaces for storage providers.

Defines contracts for user, receipt and invoice stores. Every receipt and
invoice operation is scoped to the owning user.
"""

from abc import ABC, abstractmethod

from marginbook.core.entities import InvoiceRecord, Receipt, User


class IUserStore(ABC):
    """Abstract interface for record owners."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Create a new user."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> bool:
        """Delete a user together with every record they own."""
        pass


class IReceiptStore(ABC):
    """
    Abstract interface for receipt storage.

    ``create_receipt`` reads the user's highest receipt number and inserts
    the new receipt with the next one inside a single transaction. It raises
    SequenceConflictError if the ``(user_id, receipt_number)`` uniqueness
    constraint rejects the insert.
    """

    @abstractmethod
    async def find_max_sequence_number(self, user_id: str) -> int | None:
        """Highest receipt number owned by the user, or None."""
        pass

    @abstractmethod
    async def create_receipt(self, receipt: Receipt) -> Receipt:
        """Assign the next receipt number and persist the receipt."""
        pass

    @abstractmethod
    async def get_receipt(self, receipt_id: str, user_id: str) -> Receipt | None:
        """Get a receipt owned by the user."""
        pass

    @abstractmethod
    async def update_receipt(self, receipt: Receipt) -> Receipt:
        """Update label and payload. The receipt number is never written."""
        pass

    @abstractmethod
    async def delete_receipt(self, receipt_id: str, user_id: str) -> bool:
        """Delete a receipt owned by the user."""
        pass

    @abstractmethod
    async def list_receipts(
        self,
        user_id: str,
        query: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Receipt]:
        """List the user's receipts, newest number first."""
        pass


class IInvoiceStore(ABC):
    """
    Abstract interface for invoice storage.

    Same numbering contract as IReceiptStore, on ``invoice_number``.
    """

    @abstractmethod
    async def find_max_sequence_number(self, user_id: str) -> int | None:
        """Highest invoice number owned by the user, or None."""
        pass

    @abstractmethod
    async def create_invoice(self, invoice: InvoiceRecord) -> InvoiceRecord:
        """Assign the next invoice number and persist the invoice."""
        pass

    @abstractmethod
    async def get_invoice(self, invoice_id: str, user_id: str) -> InvoiceRecord | None:
        """Get an invoice owned by the user."""
        pass

    @abstractmethod
    async def update_invoice(self, invoice: InvoiceRecord) -> InvoiceRecord:
        """Update label, rate, payload and totals. The number is never written."""
        pass

    @abstractmethod
    async def delete_invoice(self, invoice_id: str, user_id: str) -> bool:
        """Delete an invoice owned by the user."""
        pass

    @abstractmethod
    async def list_invoices(
        self,
        user_id: str,
        query: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InvoiceRecord]:
        """List the user's invoices, newest number first."""
        pass

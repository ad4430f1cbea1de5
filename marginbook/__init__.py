"""MarginBook: margin calculations, receipts and invoices."""

__version__ = "1.0.0"

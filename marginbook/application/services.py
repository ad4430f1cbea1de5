"""
Service factory functions for dependency injection.

Wires settings into core services. Use cases should import from here.
"""

from marginbook.config import get_settings
from marginbook.core.entities import RecordKind
from marginbook.core.services import SequenceAssigner, format_sequence_number

# Singleton service instances
_sequence_assigner: SequenceAssigner | None = None


def get_sequence_assigner() -> SequenceAssigner:
    """Get or create the SequenceAssigner configured from numbering settings."""
    global _sequence_assigner

    if _sequence_assigner is None:
        numbering = get_settings().numbering
        _sequence_assigner = SequenceAssigner(
            max_attempts=numbering.max_attempts,
            retry_delay=numbering.retry_delay,
            retry_multiplier=numbering.retry_multiplier,
        )
    return _sequence_assigner


def display_number(kind: RecordKind, number: int) -> str:
    """Format a sequence number with the configured prefix and width."""
    numbering = get_settings().numbering
    return format_sequence_number(
        kind,
        number,
        width=numbering.pad_width,
        prefixes={
            RecordKind.RECEIPT: numbering.receipt_prefix,
            RecordKind.INVOICE: numbering.invoice_prefix,
        },
    )


def reset_services() -> None:
    """Reset all singleton services (for testing)."""
    global _sequence_assigner
    _sequence_assigner = None

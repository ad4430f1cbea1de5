"""Infrastructure layer implementations."""

from marginbook.infrastructure import storage

__all__ = ["storage"]

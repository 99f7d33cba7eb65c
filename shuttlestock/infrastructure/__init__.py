"""Infrastructure layer implementations."""

from shuttlestock.infrastructure import storage

__all__ = ["storage"]

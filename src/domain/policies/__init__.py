"""Domain policies package."""

from .event_validation import validate_event

__all__ = ["validate_event"]

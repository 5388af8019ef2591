"""JSON Schemas for lab-file inputs and their validators."""

from .validator import ValidationError, validate_entries, validate_format

__all__ = ["ValidationError", "validate_entries", "validate_format"]

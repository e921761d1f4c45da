"""
Exception hierarchy for the EasyEDA to KiCad converter.

Per-field and per-line problems inside a payload are never raised; the
decoders fall back to defaults and drop what they cannot read. Only problems
that make a whole conversion impossible surface as exceptions.
"""

from typing import Any, Dict, Optional


class ConversionError(Exception):
    """Base class for all converter errors.

    Attributes:
        message: Human readable description.
        context: Extra information (LCSC id, file path, ...).
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class MissingData(ConversionError):
    """A required collection or field is absent from the payload."""


class ParseError(ConversionError):
    """Content could not be parsed and cannot be recovered locally."""


class Unsupported(ConversionError):
    """A recognized primitive that is not implemented."""


class ModelConversionError(ConversionError):
    """The 3D mesh could not be reformatted."""


class ApiError(ConversionError):
    """The remote content API failed or returned an unusable response."""

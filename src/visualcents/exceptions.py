"""Custom exceptions for VisualCents."""


class VisualCentsError(Exception):
    """Base exception for all VisualCents errors."""


class ConfigurationError(VisualCentsError):
    """Exception raised for configuration related errors."""


class ValidationError(VisualCentsError):
    """Exception raised for data validation errors."""


class InvalidPeriodError(ValidationError):
    """Exception raised when a year/month pair does not name a calendar month."""


class OCRResponseError(VisualCentsError):
    """Exception raised when an OCR service payload cannot be decoded."""

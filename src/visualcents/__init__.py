"""VisualCents - personal finance bookkeeping core.

This package provides receipt text extraction for OCR'd payment screenshots
and calendar-aligned aggregation of transactions for calendar, statistics
and budget views.
"""

__version__ = "0.1.0"
__author__ = "VisualCents"

from visualcents.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__", "__author__"]

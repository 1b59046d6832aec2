"""Receipt scanning support.

OCR itself happens in a third-party service; this package turns its output
into structured receipt fields.
"""

from .extractor import AMOUNT_RULES, ExtractionRule, ReceiptTextExtractor, infer_year
from .ocr_response import decode_ocr_response

__all__ = ["AMOUNT_RULES", "ExtractionRule", "ReceiptTextExtractor", "decode_ocr_response", "infer_year"]

from .categories import CATEGORIES, FALLBACK_CATEGORY, categorize
from .dispatch import detect_format, parse_tokens
from .errors import InvoiceParseError, UnsupportedFormatError

__all__ = [
    'CATEGORIES',
    'FALLBACK_CATEGORY',
    'categorize',
    'detect_format',
    'parse_tokens',
    'InvoiceParseError',
    'UnsupportedFormatError',
]

class InvoiceParseError(Exception):
    """Base error for invoice parsing."""


class UnsupportedFormatError(InvoiceParseError):
    """No registered vendor parser recognizes the document."""

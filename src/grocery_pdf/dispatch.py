"""Route a token sequence to the vendor parser that recognizes it."""

from typing import Callable, NamedTuple

from loguru import logger

from . import parse_blinkit_invoice, parse_zepto_invoice
from .categories import first_match
from .errors import UnsupportedFormatError


class VendorParser(NamedTuple):
    name: str
    can_parse: Callable
    parse: Callable


# Checked in order; the first recognizer that accepts the tokens wins.
PARSERS = [
    VendorParser(parse_zepto_invoice.NAME, parse_zepto_invoice.can_parse, parse_zepto_invoice.parse),
    VendorParser(parse_blinkit_invoice.NAME, parse_blinkit_invoice.can_parse, parse_blinkit_invoice.parse),
]

UNSUPPORTED_MESSAGE = 'Unsupported PDF format - not a Zepto or Blinkit invoice'


def find_parser(tokens, parsers=None):
    """The first parser claiming ``tokens``, or None."""
    candidates = [(p.can_parse, p) for p in (PARSERS if parsers is None else parsers)]
    return first_match(candidates, tokens, test=lambda can_parse, t: can_parse(t))


def detect_format(tokens, parsers=None):
    parser = find_parser(tokens, parsers)
    return parser.name if parser else None


def parse_tokens(tokens, parsers=None):
    tokens = list(tokens)
    parser = find_parser(tokens, parsers)
    if parser is None:
        logger.warning('No parser recognizes document ({} token(s))', len(tokens))
        raise UnsupportedFormatError(UNSUPPORTED_MESSAGE)

    logger.debug('Parsing document as {}', parser.name)
    return parser.parse(tokens)

"""
Tests for format detection and routing.
"""

import pytest
from grocery_pdf import UnsupportedFormatError, parse_tokens
from grocery_pdf.dispatch import PARSERS, VendorParser, detect_format, find_parser


def _never(tokens):
    raise AssertionError('parser should not run')


class TestDetectFormat:

    def test_zepto(self, zepto_tokens, lemon_row):
        assert detect_format(zepto_tokens([lemon_row])) == 'zepto'

    def test_blinkit(self, blinkit_chunk, lemon_row):
        assert detect_format(blinkit_chunk([lemon_row])) == 'blinkit'

    def test_unknown(self):
        assert detect_format(['Swiggy', 'Instamart']) is None
        assert detect_format([]) is None

    def test_zepto_is_tried_first(self, lemon_row):
        tokens = ['Tax Invoice', 'Invoice No.: Z1', 'SR', *lemon_row]
        assert detect_format(tokens) == 'zepto'

    def test_registry_order(self):
        assert [p.name for p in PARSERS] == ['zepto', 'blinkit']


class TestParseTokens:

    def test_routes_to_zepto(self, zepto_tokens, lemon_row):
        result = parse_tokens(zepto_tokens([lemon_row]))
        inv = result['invoices'][0]
        assert inv['items'][0]['description'] == 'Lemon'
        assert inv['items'][0]['category'] == 'Fresh Produce – Vegetables & Herbs'
        assert inv['items_total'] == 50.0

    def test_routes_to_blinkit(self, blinkit_chunk, lemon_row):
        result = parse_tokens(blinkit_chunk([lemon_row]) + blinkit_chunk([lemon_row], order_id='2'))
        inv = result['invoices'][0]
        assert [it['sr'] for it in inv['items']] == [1, 2]
        assert inv['order_no'] == ['1111', '2']

    def test_empty_tokens_unsupported(self):
        with pytest.raises(UnsupportedFormatError, match='Unsupported PDF format'):
            parse_tokens([])

    def test_no_parser_runs_when_unsupported(self):
        parsers = [VendorParser('never', lambda t: False, _never)]
        with pytest.raises(UnsupportedFormatError):
            parse_tokens(['anything'], parsers=parsers)

    def test_first_claiming_parser_wins(self):
        parsers = [
            VendorParser('a', lambda t: 'x' in t, lambda t: {'invoices': ['a']}),
            VendorParser('b', lambda t: True, lambda t: {'invoices': ['b']}),
        ]
        assert parse_tokens(['x'], parsers=parsers) == {'invoices': ['a']}
        assert parse_tokens(['y'], parsers=parsers) == {'invoices': ['b']}
        assert find_parser(['y'], parsers).name == 'b'

    def test_empty_registry_is_unsupported(self, zepto_tokens, lemon_row):
        with pytest.raises(UnsupportedFormatError):
            parse_tokens(zepto_tokens([lemon_row]), parsers=[])

    def test_accepts_any_iterable(self, zepto_tokens, lemon_row):
        result = parse_tokens(iter(zepto_tokens([lemon_row])))
        assert len(result['invoices']) == 1


class TestInvariants:
    """Properties every parsed invoice satisfies"""

    def _invoices(self, zepto_tokens, blinkit_chunk, lemon_row):
        onion = ['3', 'Onion', '30.00', '0.00', '1', '28.57', '2.50', '0.71', '2.50', '0.71', '0.00', '30.00']
        docs = [
            zepto_tokens([lemon_row, onion]),
            blinkit_chunk([onion, lemon_row]) + blinkit_chunk([lemon_row]),
        ]
        for tokens in docs:
            yield from parse_tokens(tokens)['invoices']

    def test_serials_contiguous(self, zepto_tokens, blinkit_chunk, lemon_row):
        for inv in self._invoices(zepto_tokens, blinkit_chunk, lemon_row):
            assert [it['sr'] for it in inv['items']] == list(range(1, len(inv['items']) + 1))

    def test_items_total_is_sum_of_prices(self, zepto_tokens, blinkit_chunk, lemon_row):
        for inv in self._invoices(zepto_tokens, blinkit_chunk, lemon_row):
            prices = [it['price'] for it in inv['items'] if it['price'] is not None]
            assert inv['items_total'] == pytest.approx(sum(prices), abs=1e-9)

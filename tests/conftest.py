"""
Shared token-sequence builders for parser tests.

Token lists mimic what the PDF extractor yields for real Zepto / Blinkit
invoices: one text run per token, in reading order.
"""

import pytest


LEMON_ROW = ['1', 'Lemon', '25.00', '0.00', '2', '50.00', '2.50', '1.25', '2.50', '1.25', '0.00', '50.00']


def _zepto_tokens(rows, invoice_no='ZPT1234', order_no='ORD5678', date='14-11-2025', footer=True):
    tokens = [
        'Tax Invoice cum Bill of Supply',
        f'Invoice No.: {invoice_no}',
        f'Order No.: {order_no}',
        f'Date : {date}',
        'Order Delivered From',
        'Geddit Convenience Private Limited',
        '(Formerly Kiranakart Technologies)',
        'FSSAI: 11521998000123',
        'SR',
        'Item & Description',
        'HSN',
        'Qty',
        'Product Rate',
    ]
    for row in rows:
        tokens.extend(row)
    if footer:
        tokens.extend(['Item Total', '50.00', 'Invoice Value', '50.00'])
    return tokens


def _blinkit_chunk(rows, invoice_no='INV001', order_id='1111', date='08-Nov-2025', upc=False):
    tokens = [
        'Tax Invoice',
        'Invoice Number', ':', invoice_no,
        'Order Id', ':', order_id,
        'Invoice Date', ':', date,
        'Sr. no',
    ]
    tokens.append('UPC' if upc else 'Item Description')
    tokens.extend(['MRP', 'Discount', 'Qty', 'Taxable Value'])
    for row in rows:
        tokens.extend(row)
    tokens.extend(['Total', '100.00'])
    return tokens


@pytest.fixture
def zepto_tokens():
    return _zepto_tokens


@pytest.fixture
def blinkit_chunk():
    return _blinkit_chunk


@pytest.fixture
def lemon_row():
    return list(LEMON_ROW)

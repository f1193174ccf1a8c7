#!/usr/bin/env python3
"""Parse Zepto invoice PDFs from their flat token sequence.

Output schema (v1):
{
  invoices: [{
    invoice_no, order_no, date (DD-MM-YYYY),
    delivery_partner: {registered_name, known_name},
    items: [{sr, description, qty, unit_price, price, category}],
    items_total,
  }]
}

One invoice per document. The item table starts at the 'SR' header token;
every row is: serial, description tokens, then a fixed run of numeric
columns (rate, discount, qty, taxable, cgst %, cgst amt, sgst %, sgst amt,
cess, total).
"""

import re

from loguru import logger

from .categories import categorize
from .common import (
    find_field,
    is_integer_token,
    new_invoice,
    new_item,
    normalize_date,
    read_description,
    read_row_numbers,
    renumber,
    unit_price_for,
)


NAME = 'zepto'

INVOICE_MARKER = 'Invoice No.:'
TABLE_MARKER = 'SR'
TABLE_END_TOKENS = {'item total', 'invoice value'}

NUMERIC_COLUMNS = 10
# one missing column is tolerated; anything shorter is a truncated row
MIN_NUMERIC_COLUMNS = NUMERIC_COLUMNS - 1

RATE_COL = 0
QTY_COL = 2

PARTNER_MARKER = 'Order Delivered From'
PARTNER_END_RE = re.compile(r'^(No\.|FSSAI:|E-commerce Platform)')


def can_parse(tokens) -> bool:
    return any(t.startswith(INVOICE_MARKER) for t in tokens)


def is_table_end(tokens, i) -> bool:
    t = tokens[i].strip().lower()
    if t in TABLE_END_TOKENS:
        return True
    if t == 'item' and i + 1 < len(tokens) and 'total' in tokens[i + 1].lower():
        return True
    return False


def clean_registered_name(raw):
    if not raw:
        return None
    s = re.sub(r'\s*\(.*?\)\s*', ' ', raw)
    s = re.sub(r'\s+', ' ', s).strip()
    return s or None


def derive_known_name(registered):
    if not registered:
        return None
    known = re.sub(r'\bprivate\s+limited\b', '', registered, flags=re.I)
    known = re.sub(r'\s+', ' ', known).strip()
    return known or registered


def parse_delivery_partner(tokens):
    partner = {'registered_name': None, 'known_name': None}
    idx = next((i for i, t in enumerate(tokens) if t.startswith(PARTNER_MARKER)), None)
    if idx is None:
        return partner

    name_tokens = []
    for t in tokens[idx + 1:]:
        if PARTNER_END_RE.match(t):
            break
        name_tokens.append(t)
    if name_tokens:
        registered = clean_registered_name(' '.join(name_tokens))
        partner = {'registered_name': registered, 'known_name': derive_known_name(registered)}
    return partner


def parse_header(tokens):
    """Invoice number, order number and date from the tokens above the table."""
    return {
        'invoice_no': find_field(tokens, re.compile(r'^Invoice\s*No\.?\s*(?::|$)', re.I), ['Invoice', 'No.']),
        'order_no': find_field(tokens, re.compile(r'^Order\s*No\.?\s*(?::|$)', re.I), ['Order', 'No.']),
        'date': normalize_date(find_field(tokens, re.compile(r'^Date\b', re.I), ['Date'])),
    }


def parse_items(tokens, table_idx):
    items = []
    i = next((k for k in range(table_idx + 1, len(tokens)) if is_integer_token(tokens[k])), None)
    if i is None:
        return items

    while i < len(tokens):
        if is_table_end(tokens, i) or not is_integer_token(tokens[i]):
            break
        sr = int(tokens[i])
        i += 1

        desc_tokens, i = read_description(tokens, i, is_table_end)
        nums, i = read_row_numbers(tokens, i, NUMERIC_COLUMNS, is_table_end)
        if len(nums) < MIN_NUMERIC_COLUMNS:
            logger.debug('Zepto row {} has {} numeric column(s); stopping table scan', sr, len(nums))
            break

        description = ' '.join(desc_tokens)
        qty = nums[QTY_COL]
        price = nums[-1]
        items.append(new_item(
            sr=sr,
            description=description,
            qty=qty,
            unit_price=unit_price_for(price, qty, nums[RATE_COL]),
            price=price,
            category=categorize(description),
        ))

    return items


def parse_invoice(tokens):
    table_idx = next((i for i, t in enumerate(tokens) if t == TABLE_MARKER), None)
    header_tokens = tokens if table_idx is None else tokens[:table_idx]

    header = parse_header(header_tokens)
    items = [] if table_idx is None else renumber(parse_items(tokens, table_idx))
    if table_idx is None:
        logger.debug('Zepto table marker {!r} not found', TABLE_MARKER)

    return new_invoice(
        invoice_no=header['invoice_no'],
        order_no=header['order_no'],
        date=header['date'],
        delivery_partner=parse_delivery_partner(tokens),
        items=items,
    )


def parse(tokens):
    invoice = parse_invoice(tokens)
    logger.debug('Zepto invoice {} parsed with {} item(s)', invoice['invoice_no'], len(invoice['items']))
    return {'invoices': [invoice] if invoice['items'] else []}


def main():
    from .cli import run_script

    run_script(parse, 'parse_zepto_invoice.py')


if __name__ == '__main__':
    main()

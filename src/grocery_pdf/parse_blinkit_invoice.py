#!/usr/bin/env python3
"""Parse Blinkit invoice PDFs from their flat token sequence.

Blinkit PDFs often bundle several invoices (one per seller / fee), each
starting with a 'Tax Invoice' token. Every chunk is parsed on its own, fee rows
printed outside any table are recovered from the whole document, and the
result is merged into a single consolidated invoice.
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
    num_from,
    read_description,
    read_row_numbers,
    renumber,
    sum_prices,
    unit_price_for,
    value_after,
)


NAME = 'blinkit'

SECTION_MARKER = 'Tax Invoice'
TABLE_MARKER = 'Sr. no'
TABLE_END = 'Total'

NUMERIC_COLUMNS = 10
# with a UPC column the row also carries cess rate + additional cess
NUMERIC_COLUMNS_UPC = 11

MRP_COL = 0
QTY_COL = 2

DELIVERY_PARTNER = {
    'registered_name': 'Blink Commerce Private Limited (formerly known as Grofers India Private Limited)',
    'known_name': 'Blinkit',
}

# (label regex, item description) for fees that may sit outside the item table
FEES = [
    (re.compile(r'convenience charge', re.I), 'Convenience charge'),
    (re.compile(r'handling charge', re.I), 'Handling charge'),
]
FEE_RE = re.compile(r'convenience charge|handling charge', re.I)
FEE_NUMBERS = 9
FEE_QTY_POS = 2

_HSN_PAREN_RE = re.compile(r'\s*\(HSN[^)]*\)', re.I)
_HSN_CODE_RE = re.compile(r'\bHSN-?\s*\d{6,8}\b', re.I)


def can_parse(tokens) -> bool:
    return SECTION_MARKER in tokens


def is_table_end(tokens, i) -> bool:
    return tokens[i] == TABLE_END


def clean_description(desc_tokens):
    s = ' '.join(desc_tokens)
    s = _HSN_PAREN_RE.sub('', s)
    s = _HSN_CODE_RE.sub('', s)
    return re.sub(r'\s{2,}', ' ', s).strip()


def split_chunks(tokens):
    """Slices of ``tokens`` from each section marker up to the next one."""
    starts = [i for i, t in enumerate(tokens) if t == SECTION_MARKER]
    ends = starts[1:] + [len(tokens)]
    return [tokens[s:e] for s, e in zip(starts, ends)]


def parse_header(tokens):
    return {
        'invoice_no': find_field(tokens, re.compile(r'invoice\s*number', re.I), ['Invoice', 'Number']),
        'order_no': find_field(tokens, re.compile(r'order\s*id', re.I), ['Order', 'Id']),
        'date': normalize_date(find_field(tokens, re.compile(r'invoice\s*date', re.I), ['Invoice', 'Date'])),
    }


def parse_items(tokens, table_idx, has_upc):
    expected = NUMERIC_COLUMNS_UPC if has_upc else NUMERIC_COLUMNS
    items = []

    i = table_idx + 1
    while i < len(tokens):
        if is_table_end(tokens, i):
            break
        if not is_integer_token(tokens[i]):
            i += 1
            continue

        sr = int(tokens[i])
        i += 1

        if has_upc:
            while i < len(tokens) and is_integer_token(tokens[i]):
                i += 1

        desc_tokens, i = read_description(tokens, i, is_table_end)
        nums, i = read_row_numbers(tokens, i, expected, is_table_end)
        if len(nums) < expected - 1:
            logger.debug('Blinkit row {} has {} numeric column(s); stopping table scan', sr, len(nums))
            break

        description = clean_description(desc_tokens)
        qty = nums[QTY_COL]
        price = nums[-1]
        items.append(new_item(
            sr=sr,
            description=description,
            qty=qty,
            unit_price=unit_price_for(price, qty, nums[MRP_COL]),
            price=price,
            category=categorize(description),
        ))

    return items


def parse_chunk(chunk):
    """One invoice from one 'Tax Invoice' section, or None without an item table."""
    try:
        table_idx = chunk.index(TABLE_MARKER)
    except ValueError:
        return None

    has_upc = 'upc' in (chunk[table_idx + 1] if table_idx + 1 < len(chunk) else '').lower()
    header = parse_header(chunk[:table_idx])
    items = parse_items(chunk, table_idx, has_upc)

    return new_invoice(
        invoice_no=header['invoice_no'],
        order_no=header['order_no'],
        date=header['date'],
        delivery_partner=dict(DELIVERY_PARTNER),
        items=items,
    )


def parse_all_invoices(tokens):
    invoices = []
    for chunk in split_chunks(tokens):
        inv = parse_chunk(chunk)
        if inv and inv['items']:
            invoices.append(inv)
    return invoices


def _last_index(tokens, value, before):
    for j in range(min(before, len(tokens) - 1), -1, -1):
        if tokens[j] == value:
            return j
    return None


def _label_value_before(tokens, label, before):
    idx = _last_index(tokens, label, before)
    return value_after(tokens, idx) if idx is not None else None


def fee_invoice(tokens, label_re, description):
    """Single-item invoice for a fee printed outside the item table, or None."""
    idx = next((i for i, t in enumerate(tokens) if label_re.search(t)), None)
    if idx is None:
        return None

    nums = []
    for t in tokens[idx + 1:]:
        if len(nums) >= FEE_NUMBERS:
            break
        n = num_from(t)
        if n is None:
            if nums:
                break
            continue
        nums.append(n)
    if not nums:
        logger.debug('{} label found without amounts; skipped', description)
        return None

    qty = nums[FEE_QTY_POS] if len(nums) > FEE_QTY_POS else 1
    total = nums[FEE_NUMBERS - 1] if len(nums) >= FEE_NUMBERS else nums[0]
    unit_price = total / qty if qty else total

    return new_invoice(
        order_no=_label_value_before(tokens, 'Order Id', idx),
        date=normalize_date(_label_value_before(tokens, 'Invoice Date', idx)),
        delivery_partner=dict(DELIVERY_PARTNER),
        items=[new_item(
            sr=1,
            description=description,
            qty=qty,
            unit_price=unit_price,
            price=total,
            category=categorize(description),
        )],
    )


def add_fallback_fees(tokens, invoices):
    """Append fee invoices for fees no parsed item carries yet. Safe to call twice."""
    for label_re, description in FEES:
        already = any(label_re.search(it['description'] or '') for inv in invoices for it in inv['items'])
        if already:
            continue
        inv = fee_invoice(tokens, label_re, description)
        if inv:
            logger.debug('Synthesized {} row ({})', description, inv['items_total'])
            invoices.append(inv)
    return invoices


def is_fee_only(invoice) -> bool:
    items = invoice['items']
    return bool(items) and all(FEE_RE.search(it['description'] or '') for it in items)


def _unique(values):
    out = []
    for v in values:
        if v not in out:
            out.append(v)
    return out


def merge_all(invoices):
    """Fold every chunk (and fee invoice) into one invoice, or None without items."""
    all_items = [dict(it) for inv in invoices for it in inv['items']]
    if not all_items:
        return None

    all_items.sort(key=lambda it: it['sr'] or 0)
    renumber(all_items)

    orders = _unique(
        inv['order_no'] for inv in invoices
        if isinstance(inv['order_no'], str) and inv['order_no'] and not is_fee_only(inv)
    )
    invoice_nos = _unique(
        inv['invoice_no'] for inv in invoices
        if isinstance(inv['invoice_no'], str) and inv['invoice_no']
    )

    if len(orders) <= 1:
        order_no = orders[0] if orders else None
    else:
        order_no = orders

    return {
        'invoice_no': ', '.join(invoice_nos) if invoice_nos else None,
        'order_no': order_no,
        'date': next((inv['date'] for inv in invoices if inv['date']), None),
        'delivery_partner': next(
            (inv['delivery_partner'] for inv in invoices if inv['delivery_partner']), None
        ),
        'items': all_items,
        'items_total': sum_prices(all_items),
    }


def parse(tokens):
    invoices = parse_all_invoices(tokens)
    logger.debug('Blinkit document has {} invoice chunk(s) with items', len(invoices))
    add_fallback_fees(tokens, invoices)
    merged = merge_all(invoices)
    return {'invoices': [merged] if merged else []}


def main():
    from .cli import run_script

    run_script(parse, 'parse_blinkit_invoice.py')


if __name__ == '__main__':
    main()

"""Helpers shared by the vendor parsers: numbers, dates, labelled fields, records."""

import re


PURE_NUMBER_RE = re.compile(r'^-?\d+(?:\.\d+)?$')
INTEGER_RE = re.compile(r'^\d+$')
_LEADING_DECIMAL_RE = re.compile(r'\d+(?:\.\d+)?|\.\d+')

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'sept': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

_DATE_ALPHA_RE = re.compile(
    r'^(\d{1,2})[-/](Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec)[-/](\d{2,4})', re.I
)
_DATE_NUM_RE = re.compile(r'^(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})$')


def num_from(token):
    """Loose numeric coercion: '₹1,234.50' -> 1234.5, '-0.50' -> -0.5, 'Rs' -> None."""
    if token is None:
        return None
    s = str(token).strip()
    negative = s.startswith('-')
    s = re.sub(r'[^\d.]', '', s)
    m = _LEADING_DECIMAL_RE.match(s)
    if not m:
        return None
    try:
        n = float(m.group(0))
    except ValueError:
        return None
    return -n if negative else n


def is_pure_number(token) -> bool:
    return bool(token) and bool(PURE_NUMBER_RE.match(token))


def is_integer_token(token) -> bool:
    return bool(token) and bool(INTEGER_RE.match(token))


def _year(y):
    return f'20{y}' if len(y) == 2 else y.zfill(4)


def normalize_date(value):
    """Normalize '08-Nov-2025', '8/11/25' or '08-11-2025' to '08-11-2025'.

    Anything else is returned trimmed, unchanged.
    """
    if not value:
        return None
    s = value.strip()
    if not s:
        return None

    m = _DATE_ALPHA_RE.match(s)
    if m:
        d, mon, y = m.groups()
        return f'{d.zfill(2)}-{MONTHS[mon.lower()]:02d}-{_year(y)}'

    m = _DATE_NUM_RE.match(s)
    if m:
        d, mm, y = m.groups()
        return f'{d.zfill(2)}-{mm.zfill(2)}-{_year(y)}'

    return s


def matches_sequence(tokens, i, pattern) -> bool:
    """True when ``tokens[i:]`` starts with ``pattern`` (case-insensitive)."""
    if i + len(pattern) > len(tokens):
        return False
    for k, expected in enumerate(pattern):
        if tokens[i + k].lower() != expected.lower():
            return False
    return True


def value_after(tokens, idx):
    """Token following the label at ``idx``, skipping a standalone ':' token."""
    j = idx + 1
    if j < len(tokens) and tokens[j] == ':':
        j += 1
    return tokens[j] if j < len(tokens) else None


def find_value_after(tokens, pattern):
    """Value for a label spread over several tokens, e.g. ['Invoice', 'Number', ':', 'X']."""
    for i in range(len(tokens)):
        if matches_sequence(tokens, i, pattern):
            return value_after(tokens, i + len(pattern) - 1)
    return None


def find_value_by_label(tokens, regex):
    """Value for a label held in one token: inline ('Order Id: 123') or in the next token."""
    for i, t in enumerate(tokens):
        if not regex.search(t):
            continue
        if ':' in t:
            inline = t.split(':', 1)[1].strip()
            if inline:
                return inline
        nxt = value_after(tokens, i)
        if nxt:
            return nxt
    return None


def find_field(tokens, regex, pattern):
    return find_value_by_label(tokens, regex) or find_value_after(tokens, pattern)


def sum_prices(items):
    """Sum of the numeric prices; None when nothing usable adds up."""
    total = sum(it['price'] for it in items if isinstance(it.get('price'), (int, float)))
    return total or None


def new_item(sr, description, qty, unit_price, price, category):
    return {
        'sr': sr,
        'description': description,
        'qty': qty,
        'unit_price': unit_price,
        'price': price,
        'category': category,
    }


def new_invoice(invoice_no=None, order_no=None, date=None, delivery_partner=None, items=None):
    items = items or []
    return {
        'invoice_no': invoice_no,
        'order_no': order_no,
        'date': date,
        'delivery_partner': delivery_partner,
        'items': items,
        'items_total': sum_prices(items),
    }


def _starts_next_row(tokens, i, stop):
    """An integer followed by description text: the serial of the next row."""
    if not is_integer_token(tokens[i]) or i + 1 >= len(tokens):
        return False
    nxt = tokens[i + 1]
    return not is_pure_number(nxt) and not (stop and stop(tokens, i + 1))


def read_row_numbers(tokens, i, expected, stop=None):
    """Read the ``expected`` numeric columns of a row from ``i``; returns (values, new_index).

    Columns are taken by position, so an unreadable token yields None in its
    slot. The row ends early at the end of the table (``stop(tokens, i)``) or
    at the serial of the next row.
    """
    values = []
    while i < len(tokens) and len(values) < expected:
        if stop and stop(tokens, i):
            break
        if _starts_next_row(tokens, i, stop):
            break
        values.append(num_from(tokens[i]))
        i += 1
    return values, i


def read_description(tokens, i, stop):
    """Collect description tokens from ``i``; returns (tokens, new_index).

    A pure number ends the description only once a non-numeric token was
    collected, so names starting with a digit ('5 Star') stay intact.
    ``stop(tokens, i)`` marks the end of the table.
    """
    desc = []
    seen_text = False
    while i < len(tokens):
        tok = tokens[i]
        if stop(tokens, i):
            break
        if is_pure_number(tok):
            if seen_text:
                break
        else:
            seen_text = True
        desc.append(tok)
        i += 1
    return desc, i


def unit_price_for(price, qty, rate):
    if price is not None and qty:
        return price / qty
    return rate or price


def renumber(items):
    """Re-assign serials 1..N in list order."""
    for n, it in enumerate(items, start=1):
        it['sr'] = n
    return items

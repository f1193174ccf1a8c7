#!/usr/bin/env python3
"""Parse a Zepto or Blinkit invoice PDF and print the structured result as JSON.

Usage: grocery-pdf <invoice.pdf>
"""

import json
import sys
from pathlib import Path

from loguru import logger

from .config import settings
from .dispatch import parse_tokens
from .errors import UnsupportedFormatError
from .tokens import extract_tokens


def setup_logging():
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)


def parse_pdf(pdf_path):
    """Extract tokens from ``pdf_path`` and parse them with the matching vendor parser."""
    return parse_tokens(extract_tokens(Path(pdf_path)))


def dump(result):
    print(json.dumps(result, indent=settings.json_indent, ensure_ascii=False))


def _pdf_path_from_argv(script_name):
    if len(sys.argv) < 2:
        print(f'Usage: {script_name} <invoice.pdf>', file=sys.stderr)
        sys.exit(2)

    pdf_path = Path(sys.argv[1])
    if not pdf_path.exists():
        raise SystemExit(f'File not found: {pdf_path}')
    return pdf_path


def run_script(parse, script_name):
    """Shared body of the per-vendor scripts: force one parser on the PDF."""
    setup_logging()
    pdf_path = _pdf_path_from_argv(script_name)
    dump(parse(extract_tokens(pdf_path)))


def main():
    setup_logging()
    pdf_path = _pdf_path_from_argv(settings.app_name)

    try:
        result = parse_pdf(pdf_path)
    except UnsupportedFormatError as e:
        print(json.dumps({'ok': False, 'reason': 'unsupported_format', 'error': str(e)}))
        sys.exit(1)

    dump(result)


if __name__ == '__main__':
    main()

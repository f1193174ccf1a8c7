"""Turn a PDF into the flat token sequence the vendor parsers read.

A token is one trimmed, non-empty text run, in the order pdfplumber emits
them, page after page. No coordinates survive this step.
"""

from pathlib import Path

import pdfplumber
from loguru import logger

from .config import settings


def tokens_from_pages(pages):
    """Flatten per-page strings into one token list, dropping blanks."""
    tokens = []
    for page in pages:
        for s in page:
            t = (s or '').strip()
            if t:
                tokens.append(t)
    return tokens


def extract_tokens(pdf_path: Path):
    pages = []
    with pdfplumber.open(str(pdf_path)) as pdf:
        for p in pdf.pages:
            words = p.extract_words(
                keep_blank_chars=True,
                use_text_flow=True,
                x_tolerance=settings.pdf_x_tolerance,
            ) or []
            pages.append([w.get('text', '') for w in words])

    tokens = tokens_from_pages(pages)
    logger.debug('Extracted {} token(s) from {} page(s) of {}', len(tokens), len(pages), pdf_path)
    return tokens

"""Scanned barcode normalization.

Retail scanners hand back EAN-13, UPC-A or EAN-8 payloads. Books carry an
EAN-13 "Bookland" code whose first twelve digits are the ISBN-13 body, so a
scan can be turned into the ISBN used for catalog lookup by keeping the 978/979
prefix and body and recomputing the check digit.

Normalization is best-effort: anything that is not recognisably a book code is
passed through rather than rejected.
"""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

ISBN_PREFIXES = ("978", "979")


def isbn13_check_digit(first12: str) -> int:
    """Weighted modulo-10 check digit shared by ISBN-13 and EAN-13.

    Weights alternate 1, 3, 1, 3, ... starting from the leftmost digit.
    """
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(first12))
    return (10 - total % 10) % 10


def ean13_to_isbn(ean13: str) -> str | None:
    """Return the ISBN-13 for a Bookland EAN-13, or None for any other prefix."""
    if len(ean13) != 13 or not ean13.isdigit():
        return None
    if ean13[:3] not in ISBN_PREFIXES:
        return None
    body = ean13[:12]
    return body + str(isbn13_check_digit(body))


def is_isbn13(identifier: str) -> bool:
    """True for a Bookland EAN-13 whose check digit is already correct."""
    return ean13_to_isbn(identifier) == identifier


def normalize(raw_barcode: str) -> str:
    """Turn a raw scanner payload into the identifier used for catalog lookup.

    - 12 digits (UPC-A): zero-padded to EAN-13, then converted if it is an ISBN.
    - 13 digits (EAN-13): converted if it is an ISBN, otherwise returned as digits.
    - 8 digits (EAN-8/UPC-E): returned as digits.
    - Anything else: returned exactly as given.
    """
    digits = "".join(ch for ch in raw_barcode if ch in "0123456789")

    if len(digits) == 12:
        ean13 = "0" + digits
        return ean13_to_isbn(ean13) or ean13

    if len(digits) == 13:
        return ean13_to_isbn(digits) or digits

    if len(digits) == 8:
        return digits

    return raw_barcode


class BarcodeScanner:
    """Receives decoded scans and forwards the normalized identifier."""

    def __init__(self, on_scanned: Callable[[str], None] | None = None) -> None:
        self.on_scanned = on_scanned
        self.scanned_isbn: str | None = None

    def handle(self, raw_barcode: str) -> str:
        isbn = normalize(raw_barcode)
        logger.info(f"Scanned {raw_barcode!r} -> {isbn}")
        self.scanned_isbn = isbn
        if self.on_scanned is not None:
            self.on_scanned(isbn)
        return isbn

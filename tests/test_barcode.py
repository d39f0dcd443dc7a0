"""Tests for barcode.py — scanner payload to ISBN-13 normalization."""
import pytest

from oriole_books.barcode import BarcodeScanner, ean13_to_isbn, is_isbn13, isbn13_check_digit, normalize


ISBNS = [
    "9780134685991",
    "9780306406157",
    "9791090636071",
    "9780000000002",
]


# ── Check digit ──────────────────────────────────────────────────────

def test_check_digit_known_isbn():
    assert isbn13_check_digit("978013468599") == 1


def test_check_digit_979_prefix():
    assert isbn13_check_digit("979109063607") == 1


def test_check_digit_zero_when_sum_divisible_by_ten():
    assert isbn13_check_digit("000000000000") == 0


def test_check_digit_alternating_weights():
    # 9*1 + 7*3 + 8*1 = 38 -> 2
    assert isbn13_check_digit("978000000000") == 2


# ── EAN-13 → ISBN ────────────────────────────────────────────────────

def test_ean13_to_isbn_non_book_prefix():
    assert ean13_to_isbn("4006381333931") is None


def test_ean13_to_isbn_wrong_length():
    assert ean13_to_isbn("978013468599") is None


def test_ean13_to_isbn_recomputes_check_digit():
    assert ean13_to_isbn("9780134685990") == "9780134685991"


def test_is_isbn13():
    assert is_isbn13("9780134685991")
    assert not is_isbn13("9780134685990")
    assert not is_isbn13("4006381333931")
    assert not is_isbn13("96385074")


# ── normalize: concrete vectors ──────────────────────────────────────

def test_valid_isbn_unchanged():
    assert normalize("9780134685991") == "9780134685991"


def test_wrong_check_digit_corrected():
    assert normalize("9780134685999") == "9780134685991"


def test_979_prefix_converted():
    assert normalize("9791090636070") == "9791090636071"


def test_separators_stripped():
    assert normalize("978-0-13-468599-1") == "9780134685991"
    assert normalize(" 978 0134 685991\n") == "9780134685991"


def test_trailing_letter_stripped_before_length_dispatch():
    # 12 digits remain, so it is handled as UPC-A
    assert normalize("978013468599X") == "0978013468599"


def test_upc_a_zero_padded():
    assert normalize("123456789012") == "0123456789012"


def test_non_book_ean13_returned_as_digits():
    assert normalize("4006381333931") == "4006381333931"
    assert normalize("400-6381-333931") == "4006381333931"


def test_ean8_passthrough():
    assert normalize("96385074") == "96385074"
    assert normalize("9638-5074") == "96385074"


@pytest.mark.parametrize("raw", ["", "12345", "abc", "12345678901234", "ISBN 0-13-468599-X"])
def test_other_lengths_return_raw_input(raw):
    assert normalize(raw) == raw


# ── normalize: properties ────────────────────────────────────────────

@pytest.mark.parametrize("isbn", ISBNS)
def test_isbn_prefix_keeps_body_and_recomputes_check(isbn):
    for last in "0123456789":
        scanned = isbn[:12] + last
        result = normalize(scanned)
        assert result[:12] == isbn[:12]
        assert int(result[12]) == isbn13_check_digit(isbn[:12])


@pytest.mark.parametrize("isbn", ISBNS)
def test_idempotent_on_isbn_output(isbn):
    once = normalize(isbn[:12] + "5")
    assert normalize(once) == once


@pytest.mark.parametrize("upc", ["123456789012", "036000291452", "978013468599"])
def test_upc_a_equivalent_to_padded_ean13(upc):
    assert normalize(upc) == normalize("0" + upc)


# ── BarcodeScanner ───────────────────────────────────────────────────

def test_scanner_forwards_isbn():
    received = []
    scanner = BarcodeScanner(on_scanned=received.append)

    result = scanner.handle("9780134685990")
    assert result == "9780134685991"
    assert scanner.scanned_isbn == "9780134685991"
    assert received == ["9780134685991"]


def test_scanner_without_callback():
    scanner = BarcodeScanner()
    assert scanner.handle("96385074") == "96385074"


def test_scanner_forwards_empty_payload():
    received = []
    scanner = BarcodeScanner(on_scanned=received.append)
    scanner.handle("")
    assert received == [""]

import pytest

from exchange.services.input_filter import filter_amount_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123", "123"),
        ("12a3", "123"),
        ("1,234.50", "1234.50"),
        ("-5", "5"),
        ("abc", ""),
        ("", ""),
        ("1.2.3", "1.2.3"),
        (" 4 2 ", "42"),
        ("١٢٣", ""),
    ],
)
def test_filter_keeps_only_ascii_digits_and_periods(raw, expected):
    assert filter_amount_text(raw) == expected


@pytest.mark.parametrize("raw", ["", "0", "x1.y2", "$ 10,000.99 USD", "..9..", "🙂7"])
def test_filter_is_idempotent(raw):
    once = filter_amount_text(raw)
    assert filter_amount_text(once) == once


def test_filter_is_an_ordered_subsequence():
    raw = "9z8.y7x6"
    out = filter_amount_text(raw)
    it = iter(raw)
    assert all(ch in it for ch in out)
    assert out == "98.76"


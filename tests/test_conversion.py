import pytest

from exchange.core.errors import AmountParseError, AmountValidationError
from exchange.services.rates.conversion import compute_conversion, parse_amount


@pytest.mark.parametrize("text, expected", [("10", 10.0), ("0.5", 0.5), (".5", 0.5), ("7.", 7.0)])
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", ".", "1.2.3", "abc", "1e5", "-3", "inf", "nan", " 1"])
def test_parse_amount_rejects_non_numbers(text):
    with pytest.raises(AmountParseError):
        parse_amount(text)


def test_parse_error_is_a_validation_error():
    assert issubclass(AmountParseError, AmountValidationError)


def test_ceiling_amount_converts():
    result = compute_conversion("10000", 1300.0)
    assert result.value == pytest.approx(13_000_000.00)
    assert result.amount == 10000
    assert result.rate == 1300.0


@pytest.mark.parametrize("amount, rate", [("1", 1300.0), ("0.01", 2.5), ("9999.99", 0.37), ("42.5", 150.0)])
def test_result_is_amount_times_rate(amount, rate):
    assert compute_conversion(amount, rate).value == pytest.approx(float(amount) * rate)


@pytest.mark.parametrize("amount", ["0", "0.0", "000", "10000.01", "20000"])
def test_out_of_range_amount_is_rejected(amount):
    with pytest.raises(AmountValidationError):
        compute_conversion(amount, 1300.0)


def test_custom_ceiling():
    with pytest.raises(AmountValidationError):
        compute_conversion("501", 1.0, ceiling=500)
    assert compute_conversion("500", 1.0, ceiling=500).value == 500


@pytest.mark.parametrize("rate", [None, 0, -1.0])
def test_missing_rate_is_a_caller_error(rate):
    with pytest.raises(ValueError):
        compute_conversion("10", rate)

from datetime import date

import pytest

from utils.command_args import as_date, as_float, as_int, as_str, parse_fields
from utils.errors import ValidationError


def test_quoted_values_are_joined():
    # python-telegram-bot splits on whitespace before we see the args
    args = ['name="Arduino', 'Uno', 'R3"', "quantity=25", "unit_price=22"]
    assert parse_fields(args) == {"name": "Arduino Uno R3", "quantity": "25", "unit_price": "22"}


def test_keys_are_case_insensitive():
    assert parse_fields(["Amount=5"]) == {"amount": "5"}


@pytest.mark.parametrize("args", [["amount"], ["=5"], ['name="open']])
def test_bad_tokens(args):
    with pytest.raises(ValidationError):
        parse_fields(args)


def test_as_float_strips_thousands_separators():
    assert as_float({"amount": "12,500.75"}, "amount") == 12500.75


def test_defaults_and_missing_fields():
    assert as_float({}, "amount", 0.0) == 0.0
    assert as_int({"months": ""}, "months", 12) == 12
    assert as_str({}, "category", "General") == "General"
    with pytest.raises(ValidationError, match="Missing required field 'amount'"):
        as_float({}, "amount")


def test_conversion_errors():
    with pytest.raises(ValidationError, match="must be a number"):
        as_float({"amount": "lots"}, "amount")
    with pytest.raises(ValidationError, match="whole number"):
        as_int({"months": "1.5"}, "months")
    with pytest.raises(ValidationError, match="date"):
        as_date({"date": "31/01/2025"}, "date")


def test_as_date():
    assert as_date({"date": "2025-01-31"}, "date") == date(2025, 1, 31)


def test_apostrophes_and_unquoted_multiword_values():
    args = ["category=other", "amount=5", "description=Bob's", "lunch", "#3"]
    assert parse_fields(args) == {"category": "other", "amount": "5", "description": "Bob's lunch #3"}


@pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "-inf", "1e999"])
def test_as_float_rejects_non_finite(raw):
    with pytest.raises(ValidationError, match="must be a number"):
        as_float({"amount": raw}, "amount")

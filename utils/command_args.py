"""
utils/command_args.py
---------------------
Parses bot command arguments of the form ``key=value``.

    /add_component name="Arduino Uno R3" quantity=25 unit_price=22
    /add_expense category=other amount=5 description=Bob's lunch

Values may be wrapped in double quotes to include spaces; an unquoted
word without ``=`` continues the value of the previous key. Apostrophes
are ordinary characters. Conversion to numbers and dates is done by the
caller through the ``as_*`` helpers so that every bad value turns into a
``ValidationError`` with a readable message.
"""

import math
import shlex
from datetime import date
from typing import Optional

from utils.errors import ValidationError


def _tokens(text: str) -> list[str]:
    lexer = shlex.shlex(text, posix=True)
    lexer.whitespace_split = True
    lexer.quotes = '"'
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise ValidationError(f"Could not read arguments: {e}") from e


def parse_fields(args: list[str]) -> dict[str, str]:
    """
    Turn the argument tokens of a command into a dict.

    Args:
        args: ``context.args`` from python-telegram-bot (already split on
            whitespace, so quoted values are re-joined here).

    Raises:
        ValidationError: On leading text without ``=``, an empty key or
            an unbalanced double quote.
    """
    fields: dict[str, str] = {}
    key = None
    for token in _tokens(" ".join(args)):
        name, sep, value = token.partition("=")
        if sep and name:
            key = name.strip().lower()
            fields[key] = value.strip()
        elif key is not None and not sep:
            fields[key] = f"{fields[key]} {token}".strip()
        else:
            raise ValidationError(f"Expected key=value, got '{token}'")
    return fields


def as_float(fields: dict[str, str], key: str, default: Optional[float] = None) -> float:
    raw = fields.get(key)
    if raw is None or raw == "":
        if default is None:
            raise ValidationError(f"Missing required field '{key}'")
        return default
    try:
        value = float(raw.replace(",", ""))
    except ValueError as e:
        raise ValidationError(f"'{key}' must be a number, got '{raw}'") from e
    if not math.isfinite(value):
        raise ValidationError(f"'{key}' must be a number, got '{raw}'")
    return value


def as_int(fields: dict[str, str], key: str, default: Optional[int] = None) -> int:
    raw = fields.get(key)
    if raw is None or raw == "":
        if default is None:
            raise ValidationError(f"Missing required field '{key}'")
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"'{key}' must be a whole number, got '{raw}'") from e


def as_date(fields: dict[str, str], key: str, default: Optional[date] = None) -> date:
    raw = fields.get(key)
    if raw is None or raw == "":
        if default is None:
            raise ValidationError(f"Missing required field '{key}'")
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(f"'{key}' must be a date like 2025-01-31, got '{raw}'") from e


def as_str(fields: dict[str, str], key: str, default: Optional[str] = None) -> str:
    raw = fields.get(key)
    if raw is None or raw == "":
        if default is None:
            raise ValidationError(f"Missing required field '{key}'")
        return default
    return raw

"""Argument handling for issuing TRC10 tokens."""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Iterable
from datetime import datetime, timezone

from dateutil import parser as date_parser

MAX_DECIMALS = 6
_MAX_TOKEN_NUM = 10**6

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_INT32_MIN, _INT32_MAX = -(1 << 31), (1 << 31) - 1
_INT64_MIN, _INT64_MAX = -(1 << 63), (1 << 63) - 1


def _parse_int(text: str, low: int, high: int) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"invalid integer {text!r}")
    number = int(text, 10)
    if not low <= number <= high:
        raise ValueError(f"integer {text!r} out of range")
    return number


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid number {text!r}")
    try:
        number = float(text)
    except ValueError as exc:
        raise ValueError(f"invalid number {text!r}") from exc
    if not math.isfinite(number):
        raise ValueError(f"number {text!r} out of range")
    return number


def _parse_float32(text: str) -> float:
    number = _parse_float(text)
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError as exc:
        raise ValueError(f"number {text!r} out of range") from exc


def _to_int64(value: float) -> int:
    if not math.isfinite(value):
        raise ValueError(f"value {value} out of range")
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value {value} out of range")
    return number


def parse_ratio(ratio: str) -> tuple[int, int]:
    """Parse a TRX-to-token ratio into ``(trx_num, token_num)``.

    The ratio is either ``TRX:TOKENS`` or a decimal number, which is cut to
    six decimal places and expressed as a fraction over a power of ten.
    """
    if ":" in ratio:
        colon = ratio.index(":")
        trx_num = _parse_int(ratio[:colon], _INT32_MIN, _INT32_MAX)
        token_num = _parse_int(ratio[colon + 1 :], _INT32_MIN, _INT32_MAX)
        return trx_num, token_num

    value = _parse_float32(ratio)
    scale = float(_MAX_TOKEN_NUM)
    value = float(int(value * scale)) / scale
    token_num = 1
    while float(int(value)) != value and token_num <= _MAX_TOKEN_NUM:
        value *= 10
        token_num *= 10
    if token_num > _MAX_TOKEN_NUM:
        raise ValueError("invalid ratio")
    return int(value), token_num


def parse_frozen_supply(entries: Iterable[str], decimals: int) -> dict[str, str]:
    """Parse ``DAYS:AMOUNT`` entries, scaling each amount by the token decimals."""
    frozen: dict[str, str] = {}
    for entry in entries:
        parts = entry.split(":")
        if len(parts) != 2:
            raise ValueError(f"invalid frozen supply [{' '.join(parts)}]")
        days, amount_text = parts
        if frozen.get(days):
            raise ValueError(
                f"frozen supply date colision {days}:{frozen[days]} -> {entry}"
            )
        try:
            amount = _parse_float(amount_text) * math.pow(10, decimals)
            frozen[days] = str(_to_int64(amount))
        except ValueError:
            raise ValueError(f"invalid frozen supply: {entry}") from None
    return frozen


def validate_decimals(decimals: int) -> int:
    """Check that the decimal precision lies between 0 and 6."""
    if decimals > MAX_DECIMALS or decimals < 0:
        raise ValueError(f"decimals should be >= 0 &&  <= 6, found {decimals}")
    return decimals


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_start_date(text: str, now: datetime | None = None) -> datetime:
    """Parse the issue start date; it must not lie before ``now``.

    Dates without a time zone are taken as UTC. The result is in UTC.
    """
    try:
        start = date_parser.parse(text)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"invalid start date {text!r}: {exc}") from exc
    start = _as_utc(start)
    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    if start < current:
        raise ValueError("start date cannot be prior issue")
    return start


def scale_total_supply(total_supply: str | int, decimals: int) -> int:
    """Return the total supply in the token's smallest unit."""
    if isinstance(total_supply, str):
        supply = _parse_int(total_supply, _INT64_MIN, _INT64_MAX)
    else:
        supply = int(total_supply)
    return _to_int64(float(supply) * math.pow(10, decimals))
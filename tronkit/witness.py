"""Summaries of network witnesses (super representatives)."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from tronkit.address import Address

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_INT32_MIN, _INT32_MAX = -(1 << 31), (1 << 31) - 1


def productivity(total_produced: int, total_missed: int) -> float:
    """Return the share of scheduled blocks produced, in percent."""
    total = total_produced + total_missed
    if total <= 0:
        return 0.0
    return total_produced / total * 100


def parse_brokerage(value: str) -> int:
    """Parse a brokerage commission, which must lie between 0 and 100."""
    if not _INT_RE.match(value):
        raise ValueError(f"invalid brokerage {value!r}")
    number = int(value)
    if not _INT32_MIN <= number <= _INT32_MAX:
        raise ValueError(f"brokerage {value!r} out of range")
    if number < 0 or number > 100:
        raise ValueError("invalid brokerage range: 0 <= X <= 100")
    return number


def witness_summary(
    witnesses: Iterable[Mapping[str, Any]], elected_only: bool = False
) -> dict[str, Any]:
    """Summarise witness records, optionally keeping only elected ones.

    Each record has the keys address (raw bytes), vote_count, is_jobs,
    total_produced, total_missed and url.
    """
    records = list(witnesses)
    rows = []
    for witness in records:
        elected = bool(witness.get("is_jobs", False))
        if elected_only and not elected:
            continue
        produced = witness.get("total_produced", 0)
        missed = witness.get("total_missed", 0)
        rows.append(
            {
                "address": str(Address(bytes(witness.get("address", b"")))),
                "votes": witness.get("vote_count", 0),
                "elected": elected,
                "blocksMissed": missed,
                "blocksProduced": produced,
                "productivity": productivity(produced, missed),
                "url": witness.get("url", ""),
            }
        )
    return {"totalCount": len(records), "filterCount": len(rows), "witnesses": rows}
"""Human-readable views of transaction contracts and network timing."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from tronkit.address import Address

_ADDRESS_FIELDS = frozenset(
    {"OwnerAddress", "ReceiverAddress", "ToAddress", "ContractAddress"}
)


def parse_contract_human_readable(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return contract fields with internal entries dropped and addresses in base58.

    ``Votes``, a list of ``{"VoteAddress": bytes, "VoteCount": int}``, becomes
    a mapping of witness address to vote count.
    """
    result: dict[str, Any] = {}
    for name, value in fields.items():
        if name.startswith("XXX_"):
            continue
        if name in _ADDRESS_FIELDS:
            value = str(Address(bytes(value)))
        result[name] = value

    if "Votes" in result:
        votes: dict[str, int] = {}
        for vote in result["Votes"] or []:
            votes[str(Address(bytes(vote["VoteAddress"])))] = vote["VoteCount"]
        result["Votes"] = votes
    return result


def _seconds(timestamp_ms: int) -> int:
    seconds = abs(timestamp_ms) // 1000
    return -seconds if timestamp_ms < 0 else seconds


def maintenance_time(timestamp_ms: int) -> dict[str, Any]:
    """Describe the next maintenance time given in milliseconds."""
    moment = datetime.fromtimestamp(_seconds(timestamp_ms), timezone.utc)
    return {
        "nextTimestamp": timestamp_ms,
        "date": moment.strftime("%Y-%m-%dT%H:%M:%SZ"),
    }
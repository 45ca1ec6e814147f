"""Parsing of account command arguments: amounts, votes, permissions, resources."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Any

from tronkit.address import base58_to_address
from tronkit.model import ResourceCode

SUN_PER_TRX = 10**6

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_INT64_MIN, _INT64_MAX = -(1 << 63), (1 << 63) - 1

# Contract types never granted to an active permission.
_EXCLUDED_OPERATIONS = frozenset({"UpdateBrokerageContract", "ShieldedTransferContract"})


def _parse_int64(text: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"invalid integer {text!r}")
    number = int(text, 10)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer {text!r} out of range")
    return number


def to_sun(value: str | float) -> int:
    """Convert a TRX amount to sun, truncating any fraction of a sun."""
    if isinstance(value, str):
        try:
            amount = float(value.strip() and value)
        except ValueError as exc:
            raise ValueError(f"invalid amount {value!r}") from exc
    else:
        amount = float(value)
    scaled = amount * float(SUN_PER_TRX)
    if not math.isfinite(scaled):
        raise ValueError(f"invalid amount {value!r}")
    return int(scaled)


def parse_votes(vote_list: Iterable[str]) -> dict[str, int]:
    """Parse ``ADDRESS:COUNT`` entries into a mapping of witness to vote count."""
    votes: dict[str, int] = {}
    for vote in vote_list:
        parts = vote.split(":")
        if len(parts) != 2:
            raise ValueError(f"invalid vote {parts}")
        witness, count_text = parts
        if votes.get(witness, 0) > 0:
            raise ValueError(f"vote colision {witness}:{votes[witness]} -> {vote}")
        try:
            witness_address = base58_to_address(witness)
        except ValueError as exc:
            raise ValueError(f"invalid address {witness}. {exc}") from exc
        try:
            count = _parse_int64(count_text)
        except ValueError as exc:
            raise ValueError(f"invalid vote count {count_text}. {exc}") from exc
        votes[str(witness_address)] = count
    return votes


def _parse_keys(spec: str) -> dict[str, int]:
    keys: dict[str, int] = {}
    for key in spec.split("+"):
        values = key.split("-")
        if len(values) != 2:
            raise ValueError(f"invalid key: {key}")
        try:
            keys[values[0]] = _parse_int64(values[1])
        except ValueError:
            raise ValueError(f"invalid key: {key}") from None
    return keys


def _parse_threshold(text: str) -> int:
    try:
        return _parse_int64(text)
    except ValueError:
        raise ValueError(f"invalid threshold: {text}") from None


def parse_permissions(
    permission_list: Iterable[str], contract_type_names: Iterable[str]
) -> tuple[dict[str, Any] | None, dict[str, Any] | None, list[dict[str, Any]]]:
    """Parse ``TYPE:THRESHOLD:ADDR1-WEIGHT+ADDR2-WEIGHT`` rules.

    TYPE is O (owner), W (witness) or A (active), in either case. Returns the
    owner permission, the witness permission (None when absent) and the list
    of active permissions. Active permissions may use every contract type in
    ``contract_type_names`` except brokerage updates and shielded transfers.
    """
    rules = list(permission_list)
    if not rules:
        raise ValueError("at least one rule is expected")
    type_names = list(contract_type_names)

    owner: dict[str, Any] | None = None
    witness: dict[str, Any] | None = None
    actives: list[dict[str, Any]] = []
    active_counter = 0

    for rule in rules:
        parts = rule.split(":")
        if len(parts) != 3:
            raise ValueError(f"invalid format: {rule}")
        kind, threshold_text, keys_text = parts
        if kind in ("O", "o"):
            if owner is not None:
                raise ValueError("can have only one owner permission")
            owner = {
                "name": "owner",
                "threshold": _parse_threshold(threshold_text),
                "keys": _parse_keys(keys_text),
            }
        elif kind in ("W", "w"):
            if witness is not None:
                raise ValueError("can have only one witness permission")
            witness = {
                "name": "witness",
                "threshold": _parse_threshold(threshold_text),
                "keys": _parse_keys(keys_text),
            }
        elif kind in ("A", "a"):
            threshold = _parse_threshold(threshold_text)
            keys = _parse_keys(keys_text)
            operations = {
                name: True for name in type_names if name not in _EXCLUDED_OPERATIONS
            }
            actives.append(
                {
                    "name": f"active{active_counter}",
                    "threshold": threshold,
                    "keys": keys,
                    "operations": operations,
                }
            )
        else:
            raise ValueError(f"invalid type: {kind}")
    return owner, witness, actives


def resource_type(code: int) -> ResourceCode:
    """Map 0 to bandwidth and 1 to energy."""
    if code == 0:
        return ResourceCode.BANDWIDTH
    if code == 1:
        return ResourceCode.ENERGY
    raise ValueError("invalid resource. Use 0 for Bandwidth or 1 for Energy")
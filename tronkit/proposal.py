"""Parsing and summaries of network upgrade proposals."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from tronkit.address import Address

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_INT64_MIN, _INT64_MAX = -(1 << 63), (1 << 63) - 1


def _parse_int64(text: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"invalid syntax {text!r}")
    number = int(text, 10)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value {text!r} out of range")
    return number


def parse_proposal_params(proposal_list: Iterable[str]) -> dict[int, int]:
    """Parse ``ID:VALUE`` entries into a mapping of parameter id to value."""
    proposals: dict[int, int] = {}
    for proposal in proposal_list:
        parts = proposal.split(":")
        if len(parts) != 2:
            raise ValueError(f"invalid proposal [{' '.join(parts)}]")
        id_text, value_text = parts
        try:
            param_id = _parse_int64(id_text)
        except ValueError as exc:
            raise ValueError(f"invalid param ID: {id_text} {exc}") from exc
        if proposals.get(param_id, 0) > 0:
            raise ValueError(
                f"proposal colision {param_id}:{proposals[param_id]} -> {proposal}"
            )
        try:
            value = _parse_int64(value_text)
        except ValueError as exc:
            raise ValueError(f"invalid vote count {value_text}. {exc}") from exc
        proposals[param_id] = value
    return proposals


def _from_millis(ms: int) -> datetime:
    seconds = abs(ms) // 1000
    if ms < 0:
        seconds = -seconds
    return datetime.fromtimestamp(seconds, timezone.utc)


def summarize_proposals(
    proposals: Iterable[Mapping[str, Any]],
    new_only: bool = False,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Summarise proposal records, newest first.

    Each record has the keys proposal_id, proposer_address (raw bytes),
    create_time and expiration_time (milliseconds), parameters and approvals
    (raw address bytes). With ``new_only`` expired proposals are left out.
    """
    if now is None:
        current = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        current = now.replace(tzinfo=timezone.utc)
    else:
        current = now

    records = list(proposals)
    rows: list[dict[str, Any]] = []
    for proposal in records:
        expiration = _from_millis(proposal.get("expiration_time", 0))
        expired = expiration < current
        if new_only and expired:
            continue
        rows.append(
            {
                "ID": proposal.get("proposal_id", 0),
                "Proposer": str(Address(bytes(proposal.get("proposer_address", b"")))),
                "CreateTime": _from_millis(proposal.get("create_time", 0)),
                "ExpirationTime": expiration,
                "Expired": expired,
                "Parameters": dict(proposal.get("parameters") or {}),
                "Approvals": [
                    str(Address(bytes(raw))) for raw in proposal.get("approvals") or []
                ],
            }
        )
    rows.reverse()
    return {"totalCount": len(records), "filterCount": len(rows), "proposals": rows}
"""A command-line value that holds a validated base58 address."""

from __future__ import annotations

from dataclasses import dataclass

from tronkit.address import Address, base58_to_address


@dataclass
class TronAddress:
    """A base58 address string, checked when set."""

    address: str = ""

    type = "tron-address"

    def __str__(self) -> str:
        return self.address

    def set(self, s: str) -> None:
        """Store ``s`` after checking that it decodes as an address."""
        try:
            base58_to_address(s)
        except ValueError as exc:
            raise ValueError(f"not a valid one address: {exc}") from exc
        self.address = s

    def get_address(self) -> Address | None:
        """Return the decoded address, or None if none is usable."""
        try:
            return base58_to_address(self.address)
        except ValueError:
            return None
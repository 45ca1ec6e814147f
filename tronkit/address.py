"""Tron account addresses: 21-byte values shown in base58check form."""

from __future__ import annotations

import base64
import binascii
import hashlib

from Crypto.Hash import keccak

HASH_LENGTH = 32
ADDRESS_LENGTH = 21
ADDRESS_LENGTH_BASE58 = 34
TRON_BYTE_PREFIX = 0x41

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: position for position, char in enumerate(_ALPHABET)}


def _b58encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    leading_zeros = len(data) - len(data.lstrip(b"\0"))
    return "1" * leading_zeros + "".join(reversed(digits))


def _b58decode(text: str) -> bytes:
    number = 0
    for char in text:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    leading_ones = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * leading_ones + body


def _checksum(payload: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4]


def _encode_check(payload: bytes) -> str:
    return _b58encode(payload + _checksum(payload))


def _decode_check(text: str) -> bytes:
    raw = _b58decode(text)
    if len(raw) <= 4:
        raise ValueError("base58 check error: input too short")
    payload, check = raw[:-4], raw[-4:]
    if _checksum(payload) != check:
        raise ValueError("base58 check error: checksum mismatch")
    return payload


def _from_hex(text: str) -> bytes:
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    if len(text) % 2:
        text = "0" + text
    return binascii.unhexlify(text)


class Address(bytes):
    """The 21-byte address of a Tron account."""

    def to_bytes(self) -> bytes:
        """Return the raw address bytes."""
        return bytes(self)

    def hex(self) -> str:  # type: ignore[override]
        """Return the address as a 0x-prefixed hex string."""
        return "0x" + bytes.hex(self)

    def __str__(self) -> str:
        if not self:
            return ""
        if self[0] == 0:
            return str(int.from_bytes(self, "big"))
        return _encode_check(bytes(self))

    def __repr__(self) -> str:
        return f"Address({str(self)!r})"

    @classmethod
    def scan(cls, src: object) -> Address:
        """Build an address from a database value, checking type and length."""
        if not isinstance(src, (bytes, bytearray)):
            raise TypeError(f"can't scan {type(src).__name__} into Address")
        if len(src) != ADDRESS_LENGTH:
            raise ValueError(
                f"can't scan bytes of len {len(src)} into Address, want {ADDRESS_LENGTH}"
            )
        return cls(bytes(src))

    def value(self) -> bytes:
        """Return the value stored for this address in a database."""
        return bytes(self)


def big_to_address(b: int) -> Address:
    """Return the address holding the big-endian bytes of ``b``, left padded."""
    magnitude = abs(b)
    data = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")
    if len(data) > ADDRESS_LENGTH:
        raise ValueError(f"value needs {len(data)} bytes, more than {ADDRESS_LENGTH}")
    return Address(data.rjust(ADDRESS_LENGTH, b"\0"))


def hex_to_address(s: str) -> Address | None:
    """Return the address encoded by a hex string, or None if it is not hex."""
    try:
        return Address(_from_hex(s))
    except ValueError:
        return None


def base58_to_address(s: str) -> Address:
    """Decode a base58check address string."""
    return Address(_decode_check(s))


def base64_to_address(s: str) -> Address:
    """Decode a base64 encoded address."""
    try:
        return Address(base64.b64decode(s, validate=True))
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 address: {exc}") from exc


def pubkey_to_address(public_key: bytes) -> Address:
    """Derive the address of an uncompressed secp256k1 public key.

    The key is either the 64 bytes X||Y or the 65-byte form starting with 0x04.
    """
    key = bytes(public_key)
    if len(key) == 65 and key[0] == 0x04:
        key = key[1:]
    if len(key) != 64:
        raise ValueError("public key must be 64 bytes, or 65 bytes starting with 0x04")
    digest = keccak.new(digest_bits=256, data=key).digest()
    return Address(bytes([TRON_BYTE_PREFIX]) + digest[-20:])
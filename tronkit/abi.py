"""Encoding of contract call parameters in the Ethereum ABI layout."""

from __future__ import annotations

import base64
import binascii
import json
import re
from dataclasses import dataclass
from typing import Any

from Crypto.Hash import keccak

from tronkit.address import base58_to_address

Param = dict[str, Any]

_INT_KINDS = ("int", "uint")
_ARRAY_RE = re.compile(r"^(.+)\[(\d*)\]$")
_ELEM_RE = re.compile(r"^(uint|int|bytes|address|bool|string)(\d*)$")
_UNSIGNED_RE = re.compile(r"^[0-9]+$")
_SIGNED_RE = re.compile(r"^[+-]?[0-9]+$")


@dataclass(frozen=True)
class AbiType:
    """A parsed ABI type.

    ``kind`` is one of int, uint, address, bool, string, bytes, fixed_bytes,
    array or slice. ``size`` is the bit size for integers, the byte size for
    fixed bytes and the length for arrays.
    """

    kind: str
    size: int = 0
    elem: AbiType | None = None
    raw: str = ""

    @property
    def is_dynamic(self) -> bool:
        if self.kind in ("string", "bytes", "slice"):
            return True
        if self.kind == "array":
            return self.elem.is_dynamic
        return False

    @property
    def head_size(self) -> int:
        if self.kind == "array" and not self.is_dynamic:
            return self.size * self.elem.head_size
        return 32


@dataclass(frozen=True)
class Argument:
    """A named, typed output of a contract method."""

    name: str
    type: AbiType
    indexed: bool = False


def parse_type(type_str: str) -> AbiType:
    """Parse an ABI type name such as ``uint256`` or ``address[2][]``."""
    match = _ARRAY_RE.match(type_str)
    if match:
        elem = parse_type(match.group(1))
        if match.group(2) == "":
            return AbiType("slice", 0, elem, type_str)
        return AbiType("array", int(match.group(2)), elem, type_str)

    match = _ELEM_RE.match(type_str)
    if not match:
        raise ValueError(f"unsupported arg type: {type_str}")
    base, digits = match.groups()
    if base in ("address", "bool", "string"):
        if digits:
            raise ValueError(f"unsupported arg type: {type_str}")
        return AbiType(base, 20 if base == "address" else 0, raw=type_str)
    if base == "bytes":
        if not digits:
            return AbiType("bytes", raw=type_str)
        size = int(digits)
        if not 1 <= size <= 32:
            raise ValueError(f"unsupported arg type: {type_str}")
        return AbiType("fixed_bytes", size, raw=type_str)
    size = int(digits) if digits else 256
    if size < 8 or size > 256 or size % 8:
        raise ValueError(f"unsupported arg type: {type_str}")
    return AbiType(base, size, raw=type_str)


def load_from_json(j_string: str) -> list[Param] | None:
    """Load a JSON list of one-entry ``{type: value}`` objects."""
    if not j_string:
        return None
    data = json.loads(j_string)
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError("expected a JSON array of objects")
    return data


def signature(method: str) -> bytes:
    """Return the four-byte selector of a method signature."""
    return keccak.new(digest_bits=256, data=method.encode()).digest()[:4]


def _convert_to_address(value: Any) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"invalid address {value!r}")
    try:
        raw = base58_to_address(value).to_bytes()
    except ValueError as exc:
        raise ValueError(f"invalid address {value}: {exc}") from exc
    if len(raw) < 20:
        raise ValueError(f"invalid address {value}: too short")
    return raw[-20:]


def _parse_big(text: str) -> int:
    try:
        if text.startswith("0x"):
            return int(text[2:], 16)
        return int(text, 10)
    except ValueError as exc:
        raise ValueError(f"invalid integer {text!r}") from exc


def _parse_small(text: str, signed: bool, bits: int) -> int:
    # Unparsable input yields 0 and out-of-range input is clamped.
    pattern = _SIGNED_RE if signed else _UNSIGNED_RE
    if not pattern.match(text):
        return 0
    number = int(text, 10)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    return max(low, min(high, number))


def _convert_to_int(ty: AbiType, value: str) -> int:
    if ty.size <= 64:
        return _parse_small(value, ty.kind == "int", ty.size)
    return _parse_big(value)


def _convert_to_bytes(ty: AbiType, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        data = binascii.unhexlify(value)
    except ValueError:
        try:
            data = base64.b64decode(value, validate=True)
        except ValueError as exc:
            raise ValueError(f"invalid bytes value {value!r}") from exc
    if ty.kind == "bytes" or ty.size == 0:
        return data
    if len(data) != ty.size:
        raise ValueError(f"invalid size: {ty.size}/{len(data)}")
    return data


def _prepare_value(ty: AbiType, value: Any) -> Any:
    if ty.kind in ("slice", "array"):
        elem = ty.elem
        if elem.kind == "address":
            if not isinstance(value, (list, tuple)):
                raise ValueError(f"unable to convert array of addresses {value!r}")
            value = [_convert_to_address(item) for item in value]
        elif (
            elem.kind in _INT_KINDS
            and elem.size > 64
            and isinstance(value, (list, tuple))
            and value
            and all(isinstance(item, str) for item in value)
        ):
            value = [_parse_big(item) for item in value]
    if ty.kind == "address":
        value = _convert_to_address(value)
    if ty.kind in _INT_KINDS and isinstance(value, str):
        value = _convert_to_int(ty, value)
    if ty.kind in ("bytes", "fixed_bytes"):
        value = _convert_to_bytes(ty, value)
    return value


def _word(number: int) -> bytes:
    return number.to_bytes(32, "big")


def _as_bytes(value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes, got {type(value).__name__}")
    return bytes(value)


def _encode_int(ty: AbiType, value: Any) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"cannot use {type(value).__name__} as {ty.raw}")
    if ty.kind == "uint":
        low, high = 0, (1 << ty.size) - 1
    else:
        low, high = -(1 << (ty.size - 1)), (1 << (ty.size - 1)) - 1
    if not low <= value <= high:
        raise ValueError(f"value {value} out of range for {ty.raw}")
    return _word(value % (1 << 256))


def _encode_dynamic_bytes(data: bytes) -> bytes:
    return _word(len(data)) + data + b"\0" * (-len(data) % 32)


def _encode(ty: AbiType, value: Any) -> bytes:
    kind = ty.kind
    if kind in _INT_KINDS:
        return _encode_int(ty, value)
    if kind == "bool":
        if not isinstance(value, bool):
            raise TypeError(f"cannot use {type(value).__name__} as bool")
        return _word(int(value))
    if kind == "address":
        data = _as_bytes(value)
        if len(data) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(data)}")
        return data.rjust(32, b"\0")
    if kind == "string":
        if not isinstance(value, str):
            raise TypeError(f"cannot use {type(value).__name__} as string")
        return _encode_dynamic_bytes(value.encode())
    if kind == "bytes":
        return _encode_dynamic_bytes(_as_bytes(value))
    if kind == "fixed_bytes":
        data = _as_bytes(value)
        if len(data) != ty.size:
            raise ValueError(f"invalid size: {ty.size}/{len(data)}")
        return data.ljust(32, b"\0")
    if kind in ("array", "slice"):
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"cannot use {type(value).__name__} as {ty.raw}")
        items = list(value)
        if kind == "array" and len(items) != ty.size:
            raise ValueError(f"{ty.raw} needs {ty.size} items, got {len(items)}")
        body = _encode_sequence([ty.elem] * len(items), items)
        return body if kind == "array" else _word(len(items)) + body
    raise ValueError(f"unsupported arg type: {ty.raw}")


def _encode_sequence(types: list[AbiType], values: list[Any]) -> bytes:
    head_length = sum(ty.head_size for ty in types)
    heads: list[bytes] = []
    tails: list[bytes] = []
    tail_length = 0
    for ty, value in zip(types, values):
        encoded = _encode(ty, value)
        if ty.is_dynamic:
            heads.append(_word(head_length + tail_length))
            tails.append(encoded)
            tail_length += len(encoded)
        else:
            heads.append(encoded)
    return b"".join(heads) + b"".join(tails)


def get_padded_param(params: list[Param]) -> bytes:
    """Encode a list of one-entry ``{type: value}`` parameters."""
    types: list[AbiType] = []
    values: list[Any] = []
    for param in params:
        if len(param) != 1:
            raise ValueError(f"invalid param {param!r}")
        ((type_str, value),) = param.items()
        try:
            ty = parse_type(type_str)
        except ValueError as exc:
            raise ValueError(f"invalid param {param!r}: {exc}") from exc
        types.append(ty)
        values.append(_prepare_value(ty, value))
    return _encode_sequence(types, values)


def pack(method: str, params: list[Param]) -> bytes:
    """Return the selector of ``method`` followed by the encoded parameters."""
    return signature(method) + get_padded_param(params)


def get_parser(abi_entries: list[dict[str, Any]], method: str) -> list[Argument]:
    """Return the output arguments of ``method`` from a JSON-style ABI list."""
    for entry in abi_entries:
        if entry.get("name") != method:
            continue
        arguments = []
        for output in entry.get("outputs") or []:
            type_str = output.get("type", "")
            try:
                ty = parse_type(type_str)
            except ValueError as exc:
                raise ValueError(f"invalid param {type_str}: {exc}") from exc
            arguments.append(
                Argument(output.get("name", ""), ty, bool(output.get("indexed", False)))
            )
        return arguments
    raise LookupError("not found")
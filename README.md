# tronkit

Building blocks for tools that work with the Tron network: addresses, ABI
parameter encoding, a YAML settings file, and parsing and summarising of the
arguments and records used by account, token, witness, proposal and exchange
operations.

## Modules

- `tronkit.address`: `Address`, a `bytes` subclass for the 21-byte account
  address. `str()` gives the Base58Check form (or, for an address starting
  with a zero byte, its decimal value); `hex()` gives a `0x`-prefixed hex
  string; `Address.scan()` builds one from a 21-byte database value and
  `value()` returns the bytes to store. Conversions: `base58_to_address`,
  `hex_to_address` (returns `None` for text that is not hex),
  `base64_to_address`, `big_to_address` and `pubkey_to_address` (from a
  64-byte or `0x04`-prefixed 65-byte uncompressed secp256k1 public key).
- `tronkit.abi`: `parse_type` turns names such as `uint256`, `bytes32` or
  `address[2][]` into `AbiType`; `signature` gives the four-byte method
  selector; `get_padded_param` encodes a list of one-entry `{type: value}`
  parameters and `pack` prepends the selector; `load_from_json` reads such a
  list from JSON; `get_parser` returns the output `Argument`s of a method from
  a JSON-style ABI list and raises `LookupError` when the method is missing.
  Addresses may be given in Base58Check, integers as decimal or `0x` hex
  strings, and bytes as hex or Base64 strings.
- `tronkit.config`: the `Config` dataclass (node, ledger, verbose, timeout,
  no_pretty, api_key, with_tls) stored as YAML. `load_config`, `save_config`
  (the file is created readable by its owner only), `init_config` (uses
  `~/.config/tronctl/config.default` by default and writes defaults,
  node `grpc.trongrid.io:50051` and timeout 20, when the file is missing or
  has no node), `set_config_value` (returns a changed copy; a node without a
  port gets `:50051`) and `get_config_value` (`"all"` gives the whole config
  as JSON).
- `tronkit.flags`: `TronAddress`, an address value that is checked when set.
- `tronkit.model`: `AccountView` with `FrozenResource`, `UnfrozenResource` and
  the `ResourceCode` enum; `AccountView.to_dict()` uses the JSON field names.
- `tronkit.witness`: `productivity`, `parse_brokerage` (0 to 100) and
  `witness_summary`.
- `tronkit.account_args`: `to_sun`, `parse_votes` (`ADDRESS:COUNT`),
  `parse_permissions` (`TYPE:THRESHOLD:ADDR1-WEIGHT+ADDR2-WEIGHT`, with type
  `O`, `W` or `A`) and `resource_type` (0 for bandwidth, 1 for energy).
- `tronkit.trc10`: `parse_ratio` (`TRX:TOKENS` or a decimal number),
  `parse_frozen_supply` (`DAYS:AMOUNT`), `validate_decimals` (0 to 6),
  `parse_start_date` (must not lie in the past; naive dates are UTC) and
  `scale_total_supply`.
- `tronkit.proposal`: `parse_proposal_params` (`ID:VALUE`) and
  `summarize_proposals` (newest first, optionally only unexpired ones).
- `tronkit.exchange`: `normalize_token` (maps `TRX` or `0` to `_` and converts
  the amount to sun) and `expected_trade_amount`.
- `tronkit.contract_view`: `parse_contract_human_readable` (drops `XXX_`
  fields, shows address fields and votes in Base58Check) and
  `maintenance_time`.

Errors are raised as exceptions, mostly `ValueError`.

## Examples

```python
from tronkit.address import base58_to_address

addr = base58_to_address("TSvT6Bg3siokv3dbdtt9o4oM1CTXmymGn1")
print(addr.hex())
print(str(addr))
```

```python
from tronkit.abi import load_from_json, pack

params = load_from_json(
    '[{"address": "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"}, {"uint256": "1000"}]'
)
print(pack("transfer(address,uint256)", params).hex())
```

```python
from tronkit.account_args import parse_votes, to_sun

votes = parse_votes(["TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R:10"])
amount = to_sun("1.5")  # 1500000
```

## What it does not do

tronkit has no command-line program and does not talk to a node: it builds
no transactions, signs nothing, broadcasts nothing and keeps no keystore.
The helpers above prepare arguments and present results for code that does.

## Installation

```
pip install tronkit
```

## Running the tests

```
pip install -e ".[test]"
pytest
```
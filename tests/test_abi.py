import pytest

from tronkit.abi import (
    Argument,
    get_padded_param,
    get_parser,
    load_from_json,
    pack,
    parse_type,
    signature,
)


def _word(n):
    return f"{n:064x}"


def test_abi_param():
    ss = 100000000000000000000
    first = get_padded_param(
        [
            {"string": "KLV Test Token"},
            {"string": "KLV"},
            {"uint8": 6},
            {"uint256": ss},
        ]
    )
    assert len(first) == 256

    second = get_padded_param(
        [
            {"string": "KLV Test Token"},
            {"string": "KLV"},
            {"uint8": "6"},
            {"uint256": str(ss)},
        ]
    )
    assert len(second) == 256
    assert first == second


def test_abi_param_array():
    param = load_from_json(
        """
    [
        {"address[2]":["TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R", "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"]}
    ]
    """
    )
    b = get_padded_param(param)
    assert len(b) == 64
    assert b.hex() == (
        "000000000000000000000000364b03e0815687edaf90b81ff58e496dea7383d7"
        "000000000000000000000000364b03e0815687edaf90b81ff58e496dea7383d7"
    )


def test_abi_param_array_uint256():
    b = get_padded_param(
        [{"uint256[2]": ["100000000000000000000", "200000000000000000000"]}]
    )
    assert len(b) == 64
    assert b.hex() == (
        "0000000000000000000000000000000000000000000000056bc75e2d63100000"
        "00000000000000000000000000000000000000000000000ad78ebc5ac6200000"
    )


def test_abi_param_array_bytes():
    param = load_from_json(
        """
    [
        {"bytes32": "0001020001020001020001020001020001020001020001020001020001020001"}
    ]
    """
    )
    b = get_padded_param(param)
    assert len(b) == 32
    assert b.hex() == "0001020001020001020001020001020001020001020001020001020001020001"


def test_abi_hex_uint256():
    b = get_padded_param([{"uint256": "43981"}, {"uint256": "0xABCD"}])
    assert len(b) == 64
    assert b.hex() == (
        "000000000000000000000000000000000000000000000000000000000000abcd"
        "000000000000000000000000000000000000000000000000000000000000abcd"
    )


def test_signature_of_transfer():
    assert signature("transfer(address,uint256)").hex() == "a9059cbb"


def test_pack_prepends_selector():
    params = [{"uint256": 1}]
    packed = pack("foo(uint256)", params)
    assert packed[:4] == signature("foo(uint256)")
    assert packed[4:] == get_padded_param(params)


def test_dynamic_slice():
    b = get_padded_param([{"uint256[]": [1, 2]}])
    assert b.hex() == _word(32) + _word(2) + _word(1) + _word(2)


def test_negative_int():
    b = get_padded_param([{"int8": "-1"}])
    assert b.hex() == "f" * 64


def test_small_uint_clamps_out_of_range():
    b = get_padded_param([{"uint8": "300"}])
    assert b.hex() == _word(255)


def test_bool_encoding():
    assert get_padded_param([{"bool": True}]).hex() == _word(1)


def test_dynamic_bytes_from_hex():
    b = get_padded_param([{"bytes": "abcd"}])
    assert b.hex() == _word(32) + _word(2) + "abcd" + "0" * 60


def test_more_than_one_key_rejected():
    with pytest.raises(ValueError):
        get_padded_param([{"uint256": 1, "bool": True}])


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        get_padded_param([{"foo": 1}])


def test_bytes32_wrong_size():
    with pytest.raises(ValueError):
        get_padded_param([{"bytes32": "0001"}])


def test_invalid_address():
    with pytest.raises(ValueError):
        get_padded_param([{"address": "not-an-address"}])


def test_address_array_needs_list():
    with pytest.raises(ValueError):
        get_padded_param([{"address[]": "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"}])


def test_parse_type_nested():
    ty = parse_type("uint256[2][]")
    assert ty.kind == "slice"
    assert ty.elem.kind == "array"
    assert ty.elem.size == 2
    assert ty.elem.elem.kind == "uint"
    assert ty.elem.elem.size == 256


def test_parse_type_defaults():
    assert parse_type("int").size == 256
    assert parse_type("bytes4").kind == "fixed_bytes"
    assert parse_type("bytes").kind == "bytes"


@pytest.mark.parametrize("bad", ["uint7", "uint264", "bytes33", "address8", "foo"])
def test_parse_type_invalid(bad):
    with pytest.raises(ValueError):
        parse_type(bad)


def test_load_from_json_empty():
    assert load_from_json("") is None


def test_load_from_json_invalid():
    with pytest.raises(ValueError):
        load_from_json("{not json")


def test_get_parser():
    entries = [
        {"name": "other", "outputs": [{"name": "x", "type": "bool"}]},
        {
            "name": "balanceOf",
            "outputs": [{"name": "balance", "type": "uint256", "indexed": False}],
        },
    ]
    arguments = get_parser(entries, "balanceOf")
    assert arguments == [Argument("balance", parse_type("uint256"), False)]


def test_get_parser_not_found():
    with pytest.raises(LookupError):
        get_parser([{"name": "a", "outputs": []}], "b")
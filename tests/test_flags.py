import pytest

from tronkit.address import base58_to_address
from tronkit.flags import TronAddress

VALID = "TSvT6Bg3siokv3dbdtt9o4oM1CTXmymGn1"


def test_set_valid_address():
    flag = TronAddress()
    flag.set(VALID)
    assert str(flag) == VALID
    assert flag.get_address() == base58_to_address(VALID)


def test_get_address_round_trips_to_string():
    flag = TronAddress()
    flag.set(VALID)
    assert str(flag.get_address()) == VALID


def test_set_invalid_keeps_previous_value():
    flag = TronAddress()
    flag.set(VALID)
    with pytest.raises(ValueError):
        flag.set(VALID[:-1] + "2")
    assert str(flag) == VALID


def test_empty_flag():
    flag = TronAddress()
    assert str(flag) == ""
    assert flag.get_address() is None


def test_type_name():
    assert TronAddress().type == "tron-address"
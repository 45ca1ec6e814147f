import pytest

from tronkit.address import base58_to_address
from tronkit.witness import parse_brokerage, productivity, witness_summary

ADDR = "TSvT6Bg3siokv3dbdtt9o4oM1CTXmymGn1"


def _record(elected, produced=10, missed=0):
    return {
        "address": base58_to_address(ADDR).to_bytes(),
        "vote_count": 42,
        "is_jobs": elected,
        "total_produced": produced,
        "total_missed": missed,
        "url": "https://example.com",
    }


def test_productivity_no_blocks():
    assert productivity(0, 0) == 0.0


def test_productivity_all_produced():
    assert productivity(10, 0) == 100.0


def test_productivity_within_bounds():
    value = productivity(7, 3)
    assert 0.0 < value < 100.0
    assert value + productivity(3, 7) == pytest.approx(100.0)


@pytest.mark.parametrize("text", ["0", "100", "20"])
def test_parse_brokerage_valid(text):
    assert parse_brokerage(text) == int(text)


@pytest.mark.parametrize("text", ["-1", "101", "abc", "", "1.5", "99999999999"])
def test_parse_brokerage_invalid(text):
    with pytest.raises(ValueError):
        parse_brokerage(text)


def test_summary_counts_and_fields():
    result = witness_summary([_record(True), _record(False, 0, 0)])
    assert result["totalCount"] == 2
    assert result["filterCount"] == 2
    first = result["witnesses"][0]
    assert first["address"] == ADDR
    assert first["votes"] == 42
    assert first["elected"] is True
    assert first["productivity"] == productivity(10, 0)
    assert first["url"] == "https://example.com"


def test_summary_elected_only():
    result = witness_summary([_record(True), _record(False), _record(True)], elected_only=True)
    assert result["totalCount"] == 3
    assert result["filterCount"] == 2
    assert all(row["elected"] for row in result["witnesses"])


def test_summary_empty():
    result = witness_summary([])
    assert result == {"totalCount": 0, "filterCount": 0, "witnesses": []}
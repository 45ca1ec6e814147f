import pytest

from tronkit.account_args import parse_permissions, parse_votes, resource_type, to_sun
from tronkit.model import ResourceCode

ADDR_A = "TSvT6Bg3siokv3dbdtt9o4oM1CTXmymGn1"
ADDR_B = "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"

TYPE_NAMES = [
    "AccountCreateContract",
    "TransferContract",
    "UpdateBrokerageContract",
    "ShieldedTransferContract",
    "VoteWitnessContract",
]


def test_to_sun_whole_trx():
    assert to_sun("1") == 1_000_000


def test_to_sun_fraction():
    assert to_sun("0.5") == 500000


def test_to_sun_scales_linearly():
    assert to_sun("3") == 3 * to_sun("1")
    assert to_sun(2.0) == to_sun("2")


def test_to_sun_zero():
    assert to_sun("0") == 0


@pytest.mark.parametrize("bad", ["abc", "", "inf", "nan"])
def test_to_sun_rejects_bad_amount(bad):
    with pytest.raises(ValueError):
        to_sun(bad)


def test_parse_votes_two_witnesses():
    votes = parse_votes([f"{ADDR_A}:10", f"{ADDR_B}:20"])
    assert votes == {ADDR_A: 10, ADDR_B: 20}


def test_parse_votes_empty():
    assert parse_votes([]) == {}


def test_parse_votes_collision():
    with pytest.raises(ValueError, match="vote colision"):
        parse_votes([f"{ADDR_A}:10", f"{ADDR_A}:5"])


def test_parse_votes_zero_first_vote_is_overwritten():
    assert parse_votes([f"{ADDR_A}:0", f"{ADDR_A}:5"]) == {ADDR_A: 5}


def test_parse_votes_bad_format():
    with pytest.raises(ValueError, match="invalid vote"):
        parse_votes([f"{ADDR_A}:1:2"])


def test_parse_votes_bad_address():
    with pytest.raises(ValueError, match="invalid address"):
        parse_votes(["notanaddress:1"])


def test_parse_votes_bad_count():
    with pytest.raises(ValueError, match="invalid vote count"):
        parse_votes([f"{ADDR_A}:many"])


def test_parse_permissions_owner():
    owner, witness, actives = parse_permissions(
        [f"o:2:{ADDR_A}-1+{ADDR_B}-1"], TYPE_NAMES
    )
    assert owner == {"name": "owner", "threshold": 2, "keys": {ADDR_A: 1, ADDR_B: 1}}
    assert witness is None
    assert actives == []


def test_parse_permissions_witness_upper_case():
    owner, witness, actives = parse_permissions([f"W:1:{ADDR_A}-1"], TYPE_NAMES)
    assert owner is None
    assert witness == {"name": "witness", "threshold": 1, "keys": {ADDR_A: 1}}


def test_parse_permissions_active_operations_exclude_restricted():
    _, _, actives = parse_permissions([f"a:3:{ADDR_A}-3"], TYPE_NAMES)
    assert len(actives) == 1
    active = actives[0]
    assert active["name"] == "active0"
    assert active["threshold"] == 3
    assert active["keys"] == {ADDR_A: 3}
    assert set(active["operations"]) == {
        "AccountCreateContract",
        "TransferContract",
        "VoteWitnessContract",
    }
    assert all(active["operations"].values())


def test_parse_permissions_several_actives():
    _, _, actives = parse_permissions([f"A:1:{ADDR_A}-1", f"A:2:{ADDR_B}-2"], TYPE_NAMES)
    assert [a["threshold"] for a in actives] == [1, 2]


def test_parse_permissions_requires_a_rule():
    with pytest.raises(ValueError, match="at least one rule"):
        parse_permissions([], TYPE_NAMES)


def test_parse_permissions_single_owner():
    with pytest.raises(ValueError, match="only one owner"):
        parse_permissions([f"o:1:{ADDR_A}-1", f"O:1:{ADDR_B}-1"], TYPE_NAMES)


def test_parse_permissions_single_witness():
    with pytest.raises(ValueError, match="only one witness"):
        parse_permissions([f"w:1:{ADDR_A}-1", f"w:1:{ADDR_B}-1"], TYPE_NAMES)


def test_parse_permissions_bad_format():
    with pytest.raises(ValueError, match="invalid format"):
        parse_permissions(["o:1"], TYPE_NAMES)


def test_parse_permissions_bad_type():
    with pytest.raises(ValueError, match="invalid type: x"):
        parse_permissions([f"x:1:{ADDR_A}-1"], TYPE_NAMES)


def test_parse_permissions_bad_threshold():
    with pytest.raises(ValueError, match="invalid threshold"):
        parse_permissions([f"o:one:{ADDR_A}-1"], TYPE_NAMES)


@pytest.mark.parametrize("keys", [ADDR_A, f"{ADDR_A}-x", f"{ADDR_A}-1-2"])
def test_parse_permissions_bad_key(keys):
    with pytest.raises(ValueError, match="invalid key"):
        parse_permissions([f"o:1:{keys}"], TYPE_NAMES)


def test_resource_type_known_codes():
    assert resource_type(0) is ResourceCode.BANDWIDTH
    assert resource_type(1) is ResourceCode.ENERGY


@pytest.mark.parametrize("code", [2, -1])
def test_resource_type_rejects_other_codes(code):
    with pytest.raises(ValueError, match="invalid resource"):
        resource_type(code)
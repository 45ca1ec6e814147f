"""Amount handling for trades on TRC10 bancor exchanges."""

from __future__ import annotations

import math

TRX_TOKEN_ID = "_"
TRX_DECIMALS = 6

_TRX_ALIASES = frozenset({"TRX", "0"})


def normalize_token(token_id: str, amount: float) -> tuple[str, float]:
    """Check a token amount and map TRX to the exchange's ``_`` id.

    TRX amounts are converted to sun. Other token ids are returned as given;
    their amounts still need scaling by the token's own precision.
    """
    amount = float(amount)
    if not amount > 0:
        raise ValueError("invalid token amount")
    if token_id in _TRX_ALIASES:
        return TRX_TOKEN_ID, amount * math.pow(10, TRX_DECIMALS)
    return token_id, amount


def expected_trade_amount(
    first_token_id: str,
    first_balance: int,
    second_token_id: str,
    second_balance: int,
    token_id: str,
    amount: float,
) -> int:
    """Estimate what a trade of ``amount`` of ``token_id`` gives back.

    The estimate uses the pool balances after the tokens sold are added and
    is rounded to the nearest whole unit.
    """
    if token_id == first_token_id:
        sold_balance, bought_balance = first_balance, second_balance
    elif token_id == second_token_id:
        sold_balance, bought_balance = second_balance, first_balance
    else:
        raise ValueError(
            f"Token ID provided does not match excahnge {first_token_id}/{second_token_id}"
        )
    numerator = float(sold_balance) + float(amount)
    if bought_balance == 0:
        # An empty pool on the other side gives an infinite ratio.
        return 0
    if numerator == 0:
        raise ValueError("cannot estimate a trade against an empty exchange")
    ratio = numerator / float(bought_balance)
    return int(math.floor(float(amount) / ratio + 0.5))
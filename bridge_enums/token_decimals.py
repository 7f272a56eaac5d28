from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .common import MissingMappingError, Tokens, coerce_member

TABLE_NAME = "token decimals"

TOKEN_DECIMALS: Mapping[Tokens, int] = MappingProxyType(
    {
        Tokens.Moon: 18,
        Tokens.USDC: 6,
        Tokens.USDCE: 6,
        Tokens.WETH: 18,
        Tokens.WBTC: 8,
        Tokens.USDT: 6,
        Tokens.SNX: 18,
        Tokens.WSTETH: 18,
        Tokens.DAI: 18,
        Tokens.GUARD: 18,
        Tokens.ETH: 18,
        Tokens.TESTOKEN: 18,
        Tokens.TOKEN1: 18,
        Tokens.TEST2: 18,
        Tokens.TEST3: 18,
        Tokens.PEPE: 18,
    }
)


def get_token_decimals(token: Tokens | str) -> int:
    token = coerce_member(Tokens, token, TABLE_NAME)
    try:
        return TOKEN_DECIMALS[token]
    except KeyError:
        raise MissingMappingError(TABLE_NAME, token) from None

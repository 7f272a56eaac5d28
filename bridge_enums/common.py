from __future__ import annotations

import datetime
import json
import logging
import sys
from collections import OrderedDict
from enum import Enum, IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from typing_extensions import TypedDict

if TYPE_CHECKING:
    from typing import TypeVar

    MEMBER_TYPE = TypeVar("MEMBER_TYPE", "ChainSlug", "Tokens")

# relative, resolved against the working directory
TABLES_PATH = Path("tables-latest.json")

# fields diff_tables relies on, per section of the exported file
REQUIRED_FIELDS = {
    "rpc_keys": ("chain", "rpc_key"),
    "token_decimals": ("token", "decimals"),
}


class ChainSlug(IntEnum):
    """Networks the bridge is deployed on. Values are EVM chain ids."""

    AEVO = 2999
    ARBITRUM = 42161
    LYRA = 957
    OPTIMISM = 10
    BSC = 56
    POLYGON_MAINNET = 137
    MAINNET = 1
    PARALLEL = 1024
    HOOK = 5112
    MANTLE = 5000
    REYA = 1729
    ARBITRUM_SEPOLIA = 421614
    OPTIMISM_SEPOLIA = 11155420
    SEPOLIA = 11155111
    POLYGON_MUMBAI = 80001
    ARBITRUM_GOERLI = 421613
    AEVO_TESTNET = 11155112
    LYRA_TESTNET = 901
    OPTIMISM_GOERLI = 420
    BSC_TESTNET = 97
    GOERLI = 5
    XAI_TESTNET = 47279324479
    SX_NETWORK_TESTNET = 647
    SX_NETWORK = 416
    MODE_TESTNET = 919
    VICTION_TESTNET = 89
    BASE = 8453
    MODE = 34443
    ANCIENT8_TESTNET = 2863311531
    ANCIENT8_TESTNET2 = 28122024
    HOOK_TESTNET = 14113
    REYA_CRONOS = 89346162
    SYNDR_SEPOLIA_L3 = 444444
    POLYNOMIAL_TESTNET = 80008
    CDK_TESTNET = 686669576


class Tokens(str, Enum):
    """Bridged tokens. Values are the token symbols."""

    Moon = "MOON"
    USDC = "USDC"
    USDCE = "USDC.e"
    WETH = "WETH"
    WBTC = "WBTC"
    USDT = "USDT"
    SNX = "SNX"
    WSTETH = "wstETH"
    DAI = "DAI"
    GUARD = "GUARD"
    ETH = "ETH"
    TESTOKEN = "TESTOKEN"
    TOKEN1 = "TOKEN1"
    TEST2 = "TEST2"
    TEST3 = "TEST3"
    PEPE = "PEPE"


class MissingMappingError(LookupError):
    """Identifier is not a member of the enum or has no entry in the table."""

    def __init__(self, table: str, key: Any) -> None:
        self.table = table
        self.key = key
        super().__init__(f"No {table} mapping for {key!r}")


def coerce_member(enum_cls: type[MEMBER_TYPE], value: Any, table: str) -> MEMBER_TYPE:
    """Turn a member, a raw value or a member name into an enum member.

    Raises `MissingMappingError` for anything that is not a member."""
    if isinstance(value, enum_cls):
        return value
    # bool is an int subclass and floats compare equal to ints, neither is an id
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise MissingMappingError(table, value)
    try:
        return enum_cls(value)
    except ValueError:
        pass
    if isinstance(value, str) and value in enum_cls.__members__:
        return enum_cls[value]
    raise MissingMappingError(table, value)


class RpcKeyEntry(TypedDict):
    chain: str
    chain_id: int
    rpc_key: str


class TokenDecimalsEntry(TypedDict):
    token: str
    symbol: str
    decimals: int


class TablesFileMetadata(TypedDict):
    datetime: str
    unix_timestamp: int


class TablesFileFormat(TypedDict):
    rpc_keys: list[RpcKeyEntry]
    token_decimals: list[TokenDecimalsEntry]
    metadata: TablesFileMetadata


def setup_logging(verbose: bool):
    log_level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    root.setLevel(log_level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    root.addHandler(handler)


def load_json_file(file: str | Path) -> Any:
    return json.loads(Path(file).read_text(), object_pairs_hook=OrderedDict)


def make_metadata(now: datetime.datetime | None = None) -> TablesFileMetadata:
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return TablesFileMetadata(
        datetime=now.isoformat(),
        unix_timestamp=int(now.timestamp()),
    )


def tables_to_dict(
    rpc_keys: dict[ChainSlug, str],
    token_decimals: dict[Tokens, int],
    metadata: TablesFileMetadata,
) -> TablesFileFormat:
    return {
        "rpc_keys": [
            {"chain": chain.name, "chain_id": chain.value, "rpc_key": key}
            for chain, key in rpc_keys.items()
        ],
        "token_decimals": [
            {"token": token.name, "symbol": token.value, "decimals": decimals}
            for token, decimals in token_decimals.items()
        ],
        "metadata": metadata,
    }


def load_tables(path: Path = TABLES_PATH) -> TablesFileFormat:
    if not path.is_file():
        raise click.ClickException(f'File "{path}" with exported tables does not exist.')

    try:
        data: TablesFileFormat = load_json_file(path)
    except json.JSONDecodeError as e:
        raise click.ClickException(f'File "{path}" is not valid json: {e}')

    try:
        complete = "metadata" in data and all(
            isinstance(entry, dict) and all(field in entry for field in fields)
            for section, fields in REQUIRED_FIELDS.items()
            for entry in data[section]
        )
    except (KeyError, TypeError):
        complete = False
    if not complete:
        raise click.ClickException(
            "File with exported tables is not complete. "
            '"metadata", "rpc_keys" and "token_decimals" sections, or fields '
            "of their entries, may be missing."
        )
    return data


def store_tables(data: TablesFileFormat, *, path: Path = TABLES_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(data, f, ensure_ascii=False, sort_keys=True, indent=1)
        f.write("\n")

    logging.info(f"Success - tables saved under {path}")

from copy import deepcopy
from io import StringIO
from unittest import mock

import pytest

from .check_tables import check_tables, diff_tables
from .common import ChainSlug, Tokens
from .rpc_keys import RPC_KEYS
from .test_data import tables
from .token_decimals import TOKEN_DECIMALS


def test_check_tables_current(caplog: pytest.LogCaptureFixture):
    with mock.patch("sys.stdout", new=StringIO()) as mock_stdout:
        assert check_tables(strict=True)

        assert len(caplog.records) == 0
        assert mock_stdout.getvalue() == ""


def test_check_tables_missing_chain(caplog: pytest.LogCaptureFixture):
    rpc_keys = dict(RPC_KEYS)
    del rpc_keys[ChainSlug.HOOK_TESTNET]

    assert not check_tables(rpc_keys=rpc_keys)

    assert len(caplog.records) == 1
    log = caplog.records[0]
    assert log.levelname == "ERROR"
    assert "Missing RPC key for chain HOOK_TESTNET" in log.getMessage()


def test_check_tables_missing_token(caplog: pytest.LogCaptureFixture):
    token_decimals = dict(TOKEN_DECIMALS)
    del token_decimals[Tokens.DAI]
    del token_decimals[Tokens.GUARD]

    assert not check_tables(token_decimals=token_decimals)

    assert len(caplog.records) == 2
    assert all(r.levelname == "ERROR" for r in caplog.records)
    assert "Missing decimals for token DAI" in caplog.records[0].getMessage()
    assert "Missing decimals for token GUARD" in caplog.records[1].getMessage()


def test_check_tables_unknown_keys(caplog: pytest.LogCaptureFixture):
    rpc_keys = {**RPC_KEYS, "LINEA": "LINEA_RPC"}
    token_decimals = {**TOKEN_DECIMALS, "BTC": 8}

    assert not check_tables(rpc_keys=rpc_keys, token_decimals=token_decimals)

    messages = [r.getMessage() for r in caplog.records]
    assert "RPC key table has unknown chain 'LINEA'" in messages
    assert "Decimals table has unknown token 'BTC'" in messages


@pytest.mark.parametrize("decimals", (-1, 6.0, "6", True, None))
def test_check_tables_invalid_decimals(caplog: pytest.LogCaptureFixture, decimals):
    token_decimals = {**TOKEN_DECIMALS, Tokens.USDC: decimals}

    assert not check_tables(token_decimals=token_decimals)

    assert len(caplog.records) == 1
    log = caplog.records[0]
    assert log.levelname == "ERROR"
    assert "Invalid decimals" in log.getMessage()


def test_check_tables_shared_rpc_key(caplog: pytest.LogCaptureFixture):
    rpc_keys = {**RPC_KEYS, ChainSlug.SEPOLIA: "GOERLI_RPC"}

    # only a warning unless strict
    assert check_tables(rpc_keys=rpc_keys)
    assert len(caplog.records) == 1
    log = caplog.records[0]
    assert log.levelname == "WARNING"
    assert log.getMessage() == "RPC key GOERLI_RPC is shared by SEPOLIA, GOERLI"

    caplog.clear()
    assert not check_tables(rpc_keys=rpc_keys, strict=True)
    assert len(caplog.records) == 1


def test_diff_tables_no_change(caplog: pytest.LogCaptureFixture):
    assert diff_tables(deepcopy(tables), deepcopy(tables))
    assert len(caplog.records) == 0


def test_diff_tables_added(caplog: pytest.LogCaptureFixture):
    old = deepcopy(tables)
    old["rpc_keys"] = old["rpc_keys"][:-1]
    old["token_decimals"] = old["token_decimals"][:-1]

    assert diff_tables(old, deepcopy(tables))

    assert len(caplog.records) == 2
    assert all(r.levelname == "INFO" for r in caplog.records)
    assert "Chain ARBITRUM added" in caplog.records[0].getMessage()
    assert "Token WSTETH added" in caplog.records[1].getMessage()


def test_diff_tables_removed(caplog: pytest.LogCaptureFixture):
    new = deepcopy(tables)
    new["rpc_keys"] = new["rpc_keys"][1:]
    new["token_decimals"] = new["token_decimals"][1:]

    assert not diff_tables(deepcopy(tables), new)

    assert len(caplog.records) == 2
    assert all(r.levelname == "ERROR" for r in caplog.records)
    assert "Chain MAINNET was removed" in caplog.records[0].getMessage()
    assert "Token USDC was removed" in caplog.records[1].getMessage()


def test_diff_tables_renamed_rpc_key(caplog: pytest.LogCaptureFixture):
    old = deepcopy(tables)
    old["rpc_keys"][0]["rpc_key"] = "MAINNET_RPC"

    assert diff_tables(old, deepcopy(tables))

    assert len(caplog.records) == 1
    log = caplog.records[0]
    assert log.levelname == "WARNING"
    assert (
        log.getMessage()
        == "RPC key of chain MAINNET changed: MAINNET_RPC -> ETHEREUM_RPC"
    )


def test_diff_tables_changed_decimals(caplog: pytest.LogCaptureFixture):
    new = deepcopy(tables)
    new["token_decimals"][0]["decimals"] = 18

    assert not diff_tables(deepcopy(tables), new)

    assert len(caplog.records) == 1
    log = caplog.records[0]
    assert log.levelname == "ERROR"
    assert log.getMessage() == "Decimals of token USDC changed: 6 -> 18"

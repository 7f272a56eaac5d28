from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Mapping

import click

from .common import (
    ChainSlug,
    TablesFileFormat,
    Tokens,
    load_tables,
    make_metadata,
    setup_logging,
    tables_to_dict,
)
from .rpc_keys import RPC_KEYS
from .token_decimals import TOKEN_DECIMALS

LOG = logging.getLogger(__name__)


@click.command(name="check")
@click.option(
    "-s",
    "--snapshot",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Previously exported tables to compare the current ones against.",
)
@click.option(
    "--strict", is_flag=True, help="Fail when two networks share an RPC key."
)
@click.option("-v", "--verbose", is_flag=True, help="Display more info.")
def check(snapshot: Path | None, strict: bool, verbose: bool) -> None:
    """Check that both tables cover every chain and token."""
    setup_logging(verbose)

    check_ok = check_tables(strict=strict)
    if snapshot is not None:
        current = tables_to_dict(dict(RPC_KEYS), dict(TOKEN_DECIMALS), make_metadata())
        check_ok = diff_tables(load_tables(snapshot), current) and check_ok

    if check_ok:
        print("SUCCESS: validation passed.")
    else:
        raise click.ClickException("ERROR: validation failed. See content above.")


def check_tables(
    rpc_keys: Mapping[ChainSlug, str] = RPC_KEYS,
    token_decimals: Mapping[Tokens, int] = TOKEN_DECIMALS,
    strict: bool = False,
) -> bool:
    checks_ok = True

    # every member must have exactly one entry, and nothing else may
    for chain in ChainSlug:
        if chain not in rpc_keys:
            LOG.error("Missing RPC key for chain %s", chain.name)
            checks_ok = False
    for key in rpc_keys:
        if not isinstance(key, ChainSlug):
            LOG.error("RPC key table has unknown chain %r", key)
            checks_ok = False

    for token in Tokens:
        if token not in token_decimals:
            LOG.error("Missing decimals for token %s", token.name)
            checks_ok = False
    for key in token_decimals:
        if not isinstance(key, Tokens):
            LOG.error("Decimals table has unknown token %r", key)
            checks_ok = False

    for token, decimals in token_decimals.items():
        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
            LOG.error("Invalid decimals %r for token %s", decimals, token)
            checks_ok = False

    chains_by_key: dict[str, list[ChainSlug]] = defaultdict(list)
    for chain, rpc_key in rpc_keys.items():
        chains_by_key[rpc_key].append(chain)
    for rpc_key, chains in chains_by_key.items():
        if len(chains) > 1:
            LOG.warning(
                "RPC key %s is shared by %s",
                rpc_key,
                ", ".join(getattr(c, "name", str(c)) for c in chains),
            )
            if strict:
                checks_ok = False

    return checks_ok


def diff_tables(old: TablesFileFormat, new: TablesFileFormat) -> bool:
    """Compare an exported snapshot with the current tables.

    Renamed RPC keys are only reported. Changed or removed decimals, and
    removed networks, fail the check since consumers depend on them."""
    checks_ok = True

    old_keys = {e["chain"]: e["rpc_key"] for e in old["rpc_keys"]}
    new_keys = {e["chain"]: e["rpc_key"] for e in new["rpc_keys"]}
    for chain, old_key in old_keys.items():
        if chain not in new_keys:
            LOG.error("Chain %s was removed from the RPC key table", chain)
            checks_ok = False
        elif new_keys[chain] != old_key:
            LOG.warning(
                "RPC key of chain %s changed: %s -> %s", chain, old_key, new_keys[chain]
            )
    for chain in sorted(new_keys.keys() - old_keys.keys()):
        LOG.info("Chain %s added with RPC key %s", chain, new_keys[chain])

    old_decimals = {e["token"]: e["decimals"] for e in old["token_decimals"]}
    new_decimals = {e["token"]: e["decimals"] for e in new["token_decimals"]}
    for token, decimals in old_decimals.items():
        if token not in new_decimals:
            LOG.error("Token %s was removed from the decimals table", token)
            checks_ok = False
        elif new_decimals[token] != decimals:
            LOG.error(
                "Decimals of token %s changed: %s -> %s",
                token,
                decimals,
                new_decimals[token],
            )
            checks_ok = False
    for token in sorted(new_decimals.keys() - old_decimals.keys()):
        LOG.info("Token %s added with %s decimals", token, new_decimals[token])

    return checks_ok

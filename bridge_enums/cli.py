from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .check_tables import check
from .common import (
    TABLES_PATH,
    ChainSlug,
    MissingMappingError,
    Tokens,
    make_metadata,
    store_tables,
    tables_to_dict,
)
from .rpc_keys import RPC_KEYS, get_rpc_key
from .token_decimals import TOKEN_DECIMALS, get_token_decimals

TOKEN_CHOICES = sorted({t.name for t in Tokens} | {t.value for t in Tokens})


@click.group()
def cli() -> None:
    """Script for looking up bridge RPC keys and token decimals."""


cli.add_command(check)


@cli.command(name="rpc-key")
@click.argument(
    "chain", type=click.Choice(list(ChainSlug.__members__), case_sensitive=False)
)
def rpc_key(chain: str) -> None:
    """Print the environment variable holding the RPC url of CHAIN."""
    try:
        print(get_rpc_key(ChainSlug[chain]))
    except MissingMappingError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("token", type=click.Choice(TOKEN_CHOICES, case_sensitive=False))
def decimals(token: str) -> None:
    """Print the decimal precision of TOKEN (name or symbol)."""
    try:
        print(get_token_decimals(token))
    except MissingMappingError as e:
        raise click.ClickException(str(e))


@cli.command()
def show() -> None:
    """Render both tables."""
    console = Console()

    chains = Table(title="RPC KEYS")
    chains.add_column("Chain", justify="left", style="blue", no_wrap=True)
    chains.add_column("Chain ID", justify="right", style="cyan")
    chains.add_column("Env variable", justify="left", style="cyan", no_wrap=True)
    for chain, key in RPC_KEYS.items():
        chains.add_row(chain.name, str(chain.value), key)

    tokens = Table(title="TOKEN DECIMALS")
    tokens.add_column("Token", justify="left", style="blue", no_wrap=True)
    tokens.add_column("Symbol", justify="left", style="cyan", no_wrap=True)
    tokens.add_column("Decimals", justify="right", style="cyan")
    for token, value in TOKEN_DECIMALS.items():
        tokens.add_row(token.name, token.value, str(value))

    console.print(chains)
    console.print(tokens)


@cli.command(name="env-template")
def env_template() -> None:
    """Print a .env skeleton with one line per RPC key."""
    for key in sorted(set(RPC_KEYS.values())):
        print(f"{key}=")


@cli.command()
@click.option(
    "-o",
    "--outfile",
    type=click.Path(resolve_path=True, dir_okay=False, writable=True, path_type=Path),
    default=TABLES_PATH,
    help="File where the tables will be saved in json format.",
)
def export(outfile: Path) -> None:
    """Export both tables to a json snapshot."""
    data = tables_to_dict(dict(RPC_KEYS), dict(TOKEN_DECIMALS), make_metadata())
    store_tables(data, path=outfile)


if __name__ == "__main__":
    cli()

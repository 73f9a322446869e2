"""
CLI entry point for trade.

Usage:
    python -m cli.main <command> [options...]

Or if installed as console script:
    trade <command> [options...]

Each run resolves credentials, issues exactly one request to the exchange
and prints the outcome.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

import click
from dotenv import find_dotenv, load_dotenv

from cli.commands import BuyArgs, CancelArgs, CommandResult, ListArgs, SellArgs, TradeArgs, run_command
from cli.output import print_error, print_result
from config.credentials import APIKEY_ENV, APISECRET_ENV, Credentials, MissingCredentialsError, resolve_credentials
from config.settings import EXCHANGE_ENV, Settings, load_settings
from exchange.base import ExchangeClient, ExchangeConfigError
from exchange.factory import build_exchange_client


# Configure logging for CLI
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)


ClientFactory = Callable[[Credentials, Settings], ExchangeClient]

POSITIVE = click.FloatRange(min=0, min_open=True)


def _handle_result(result: CommandResult) -> None:
    """Print the result; failures go to stderr and exit with code 1."""
    print_result(result.message, result.success)


def get_client_factory(ctx: click.Context) -> ClientFactory:
    """Get the exchange client factory, overridable through ctx.obj."""
    return ctx.obj.get('client_factory', build_exchange_client)


def _run(
    ctx: click.Context,
    args: TradeArgs,
    *,
    apikey: Optional[str],
    apisecret: Optional[str],
    exchange: Optional[str],
) -> None:
    """Resolve credentials, build the client, dispatch once and render."""
    try:
        credentials = resolve_credentials(apikey, apisecret)
    except MissingCredentialsError as exc:
        print_error(str(exc))

    settings = load_settings(exchange_id=exchange)
    try:
        client = get_client_factory(ctx)(credentials, settings)
    except ExchangeConfigError as exc:
        print_error(str(exc))

    result = asyncio.run(run_command(client, args))
    _handle_result(result)


def connection_options(func: Callable) -> Callable:
    """Options shared by every command that talks to the exchange."""
    func = click.option(
        '--exchange', '-e',
        default=None,
        help=f'ccxt exchange id (default: {EXCHANGE_ENV} or binance).',
    )(func)
    func = click.option(
        '--apisecret', '-t',
        default=None,
        help=f'API secret. Alternatively use the {APISECRET_ENV} environment variable.',
    )(func)
    func = click.option(
        '--apikey', '-k',
        default=None,
        help=f'API key. Alternatively use the {APIKEY_ENV} environment variable.',
    )(func)
    return func


def limit_order_options(func: Callable) -> Callable:
    """Options shared by buy and sell."""
    func = click.option('--quantity', '-q', type=POSITIVE, required=True, help='Amount to trade.')(func)
    func = click.option('--rate', '-r', type=POSITIVE, required=True, help='Limit price.')(func)
    func = click.option('--market', '-m', required=True, help="Market, e.g. 'BTC-LTC' or 'LTC/BTC'.")(func)
    return func


# ═══════════════════════════════════════════════════════════════════
# CLI GROUP AND COMMANDS
# ═══════════════════════════════════════════════════════════════════

@click.group(invoke_without_command=True)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging.')
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Trade on a cryptocurrency exchange via the command line.

    \b
    Examples:
        trade buy --quantity 1 --rate 10 --market 'BTC-LTC'
        trade sell --quantity 1 --rate 10 --market 'BTC-ETH'
        trade cancel --uuid 'ec810bf0-76ae-4ce7-8b2f-5576bf38d3e2'
        trade list
        trade help
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        # ccxt logs request headers, API key included, at DEBUG.
        logging.getLogger("ccxt").setLevel(logging.INFO)

    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@cli.command("help")
@click.pass_context
def help_cmd(ctx: click.Context) -> None:
    """Display help information."""
    click.echo(ctx.parent.get_help())


# ─────────────────────────────────────────────────────────────────
# BUY / SELL
# ─────────────────────────────────────────────────────────────────

@cli.command()
@limit_order_options
@connection_options
@click.pass_context
def buy(
    ctx: click.Context,
    market: str,
    rate: float,
    quantity: float,
    apikey: Optional[str],
    apisecret: Optional[str],
    exchange: Optional[str],
) -> None:
    """Create a new limit buy order."""
    _run(ctx, BuyArgs(market, rate, quantity), apikey=apikey, apisecret=apisecret, exchange=exchange)


@cli.command()
@limit_order_options
@connection_options
@click.pass_context
def sell(
    ctx: click.Context,
    market: str,
    rate: float,
    quantity: float,
    apikey: Optional[str],
    apisecret: Optional[str],
    exchange: Optional[str],
) -> None:
    """Create a new limit sell order."""
    _run(ctx, SellArgs(market, rate, quantity), apikey=apikey, apisecret=apisecret, exchange=exchange)


# ─────────────────────────────────────────────────────────────────
# CANCEL / LIST
# ─────────────────────────────────────────────────────────────────

@cli.command()
@click.option('--uuid', '-u', required=True, help='Id of the order to cancel.')
@click.option('--market', '-m', default=None, help='Market of the order, required by some exchanges.')
@connection_options
@click.pass_context
def cancel(
    ctx: click.Context,
    uuid: str,
    market: Optional[str],
    apikey: Optional[str],
    apisecret: Optional[str],
    exchange: Optional[str],
) -> None:
    """Cancel an existing order."""
    _run(ctx, CancelArgs(uuid, market), apikey=apikey, apisecret=apisecret, exchange=exchange)


@cli.command("list")
@click.option('--market', '-m', default=None, help='Only list orders in this market.')
@connection_options
@click.pass_context
def list_orders(
    ctx: click.Context,
    market: Optional[str],
    apikey: Optional[str],
    apisecret: Optional[str],
    exchange: Optional[str],
) -> None:
    """List open orders."""
    _run(ctx, ListArgs(market), apikey=apikey, apisecret=apisecret, exchange=exchange)


# ═══════════════════════════════════════════════════════════════════
# MAIN ENTRY POINT
# ═══════════════════════════════════════════════════════════════════

def main() -> None:
    """Main entry point for CLI."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    cli(obj={})


if __name__ == "__main__":
    main()

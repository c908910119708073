"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.pinata_client import PinataPublisher
from adapters.solana_ledger import connect_ledger
from core.config import IssuanceMode, write_user_env_vars
from core.domain.errors import ConfigError
from core.domain.models import LAMPORTS_PER_SOL, MIN_BALANCE_LAMPORTS
from core.log import configure_logging
from core.services.configuration import ConfigResolver, IssuerConfig

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_rpc(config: IssuerConfig) -> tuple[bool, str]:
    try:
        async with connect_ledger(config.rpc_endpoint) as ledger:
            balance = await ledger.get_balance(config.keypair.pubkey())
    except Exception as exc:
        return False, str(exc)
    sol = balance / LAMPORTS_PER_SOL
    if balance < MIN_BALANCE_LAMPORTS:
        return False, f"{sol:.4f} SOL (< {MIN_BALANCE_LAMPORTS / LAMPORTS_PER_SOL:g} SOL required)"
    return True, f"{sol:.4f} SOL"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    configure_logging()

    table = Table(title="SPL-ISSUER Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config (modo interactivo: no exige TOKEN_*)
    try:
        config: IssuerConfig | None = ConfigResolver(IssuanceMode.INTERACTIVE, log_failures=False).resolve()
        table.add_row("Config", "OK", f"RPC {config.rpc_endpoint}")
        table.add_row("Wallet", "OK", str(config.keypair.pubkey()))
    except ConfigError as exc:
        config = None
        table.add_row("Config", "FAIL", str(exc))

    try:
        ConfigResolver(IssuanceMode.STATIC, log_failures=False).resolve()
        table.add_row("Token params", "OK", "Static mode available")
    except ConfigError as exc:
        table.add_row("Token params", "OPTIONAL", f"{exc} -> use --interactive")

    if config is not None:
        ok_rpc, detail_rpc = asyncio.run(_check_rpc(config))
        table.add_row("RPC / balance", "OK" if ok_rpc else "FAIL", detail_rpc)

        if config.pinning is not None:
            ok_pin, detail_pin = asyncio.run(
                PinataPublisher(config.pinning, config.settings).test_authentication()
            )
            table.add_row("Pinata", "OK" if ok_pin else "FAIL", detail_pin)
        else:
            table.add_row("Pinata", "OPTIONAL", "No keys set -> image upload unavailable")

    _console.print(table)

    if config is None:
        _console.print(
            "\n[yellow]Note:[/yellow] Set SECRET_KEYPAIR_PATH and RPC_ENDPOINT in .env before running `create`."
        )


@app.command(name="setup-pinata")
def setup_pinata() -> None:
    """Interactive Pinata setup (stores keys in the user config .env)."""

    api_key = typer.prompt("Pinata API key", hide_input=True).strip()
    secret = typer.prompt("Pinata secret API key", hide_input=True).strip()

    if not api_key or not secret:
        raise typer.BadParameter("both keys are required")

    env_path = write_user_env_vars(
        {
            "PINATA_API_KEY": api_key,
            "PINATA_SECRET_API_KEY": secret,
        }
    )

    _console.print(f"[green]Saved Pinata config to:[/green] {env_path}")

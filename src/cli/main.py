"""CLI principal (typer).

Comandos:
- `create`: flujo completo de emisión (config -> parámetros -> imagen -> mint -> export)
- `doctor`: diagnóstico de entorno y setup de claves Pinata

La CLI es la única capa que convierte errores en exit codes.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console

from adapters.json_exporter import export_mint_record_json
from adapters.pinata_client import PinataPublisher
from adapters.solana_ledger import connect_ledger
from cli import doctor
from cli.ui_components import build_mint_record_table, print_banner
from core.config import IssuanceMode
from core.domain.errors import IssuerError
from core.domain.models import MintRecord
from core.log import configure_logging
from core.services.collector import CollectorHooks, collect_parameters
from core.services.configuration import ConfigResolver
from core.services.issuance import IssuanceHooks, run_issuance

app = typer.Typer(
    name="spl-issuer",
    no_args_is_help=True,
    add_completion=False,
    help="Create an SPL token mint, pre-mint an initial supply and export the result.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = logging.getLogger(__name__)


def _prompt(label: str, default: str | None) -> str:
    return typer.prompt(label, default=default, show_default=bool(default))


def _warn(message: str) -> None:
    _console.print(f"[yellow]{message}[/yellow]")


@app.command()
def create(
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Ask for token parameters instead of reading TOKEN_* variables.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the token details JSON (default: OUTPUT_PATH or token-details.json).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    """Create the mint, the operator ATA, pre-mint and export token-details.json."""

    configure_logging(verbose=verbose)
    if banner:
        print_banner(_console)

    logger.info("Starting token creation and minting process...")
    try:
        config = ConfigResolver(IssuanceMode.from_bool(interactive)).resolve()
        logger.info("Environment variables validated successfully.")

        params = config.token
        if params is None:
            params = collect_parameters(CollectorHooks(prompt=_prompt, warning=_warn))

        publisher = PinataPublisher(config.pinning, config.settings) if config.pinning else None
        output_path = output or config.output_path

        def _export(record: MintRecord) -> Path:
            return export_mint_record_json(record=record, output_path=output_path)

        record = asyncio.run(
            run_issuance(
                identity=config.keypair,
                endpoint=config.rpc_endpoint,
                params=params,
                connect=connect_ledger,
                export=_export,
                publisher=publisher,
                hooks=IssuanceHooks(
                    image_published=lambda url: _console.print(f"[green]Image URL:[/green] {url}"),
                    exported=lambda path: _console.print(f"[green]Exported to:[/green] {path}"),
                ),
            )
        )
    except IssuerError as exc:
        logger.error("Error during token creation and minting: %s", exc)
        raise typer.Exit(code=1) from exc
    except (typer.Exit, typer.Abort):
        raise
    except Exception as exc:
        logger.exception("Unexpected error during token creation and minting")
        raise typer.Exit(code=1) from exc

    _console.print(build_mint_record_table(record))
    logger.info("Token creation and minting process completed successfully!")


def run() -> None:
    app()

"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `create` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import MintRecord


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("SPL-ISSUER", style="bold cyan")
    subtitle = Text("Mint • ATA • Pre-mint • IPFS", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_mint_record_table(record: MintRecord) -> Table:
    """Tabla resumen del `MintRecord` emitido."""

    table = Table(title="Token Details")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Name", record.name)
    table.add_row("Symbol", record.symbol)
    table.add_row("Total Supply", f"{record.total_supply:,}")
    table.add_row("Decimals", str(record.decimals))
    table.add_row("Mint Address", record.mint_address)
    table.add_row("ATA Address", record.ata_address)
    table.add_row("Pre-mint Amount", f"{record.premint_amount:,}")
    table.add_row("Image URL", record.image_url or "-")
    return table

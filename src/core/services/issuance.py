"""Orquestación de la emisión de un token SPL.

Flujo estrictamente secuencial; cada paso es precondición del siguiente:

1. conexión al RPC (compromiso "confirmed")
2. guardia de balance (>= 0.1 SOL)
3. creación del mint (operador = mint authority + freeze authority)
4. get-or-create del ATA del operador
5. `mint_to` de `premint * 10**decimals`
6. relectura del mint (decimales confirmados por la red)
7. ensamblado del `MintRecord`

Cualquier fallo se propaga como `IssuanceError` con la causa encadenada. No
hay reintentos ni transacciones compensatorias: un mint creado no se
"deshace" si el minteo posterior falla.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

from solders.keypair import Keypair

from core.domain.errors import InsufficientFundsError, IssuanceError, IssuerError, UploadError
from core.domain.models import (
    LAMPORTS_PER_SOL,
    MIN_BALANCE_LAMPORTS,
    MintRecord,
    TokenParameters,
    raw_amount,
)
from core.interfaces.ledger import LedgerFactory
from core.interfaces.publisher import ImagePublisher

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _step(name: str, action: Callable[[], Awaitable[T]]) -> T:
    try:
        return await action()
    except IssuerError:
        raise
    except Exception as exc:
        raise IssuanceError(name, str(exc) or exc.__class__.__name__) from exc


async def issue_token(
    *,
    identity: Keypair,
    endpoint: str,
    params: TokenParameters,
    connect: LedgerFactory,
    image_url: str | None = None,
    min_balance: int = MIN_BALANCE_LAMPORTS,
) -> MintRecord:
    """Ejecuta los pasos 1–7 y devuelve el `MintRecord`."""

    owner = identity.pubkey()
    try:
        async with connect(endpoint) as ledger:
            logger.info("Connected to RPC endpoint: %s", endpoint)
            logger.info("Loaded wallet: %s", owner)

            balance = await _step("balance_check", lambda: ledger.get_balance(owner))
            logger.info("Wallet balance: %.2f SOL", balance / LAMPORTS_PER_SOL)
            if balance < min_balance:
                raise InsufficientFundsError(balance, min_balance)

            logger.info("Creating new SPL Token Mint...")
            mint = await _step(
                "create_mint",
                lambda: ledger.create_mint(
                    payer=identity,
                    mint_authority=owner,
                    freeze_authority=owner,
                    decimals=params.decimals,
                ),
            )
            logger.info("New Mint created: %s", mint)

            logger.info("Fetching or creating Associated Token Account (ATA)...")
            ata = await _step(
                "associated_account",
                lambda: ledger.get_or_create_associated_account(
                    payer=identity,
                    mint=mint,
                    owner=owner,
                ),
            )
            logger.info("ATA for wallet: %s", ata)

            amount = raw_amount(params.premint_amount, params.decimals)
            logger.info("Minting %s tokens to ATA (%s base units)...", params.premint_amount, amount)
            signature = await _step(
                "mint_to",
                lambda: ledger.mint_to(
                    payer=identity,
                    mint=mint,
                    account=ata,
                    authority=identity,
                    amount=amount,
                ),
            )
            logger.info("Mint transaction signature: %s", signature)

            info = await _step("get_mint_info", lambda: ledger.get_mint_info(mint))
            logger.info("Confirmed mint supply: %s base units", info.supply)
    except IssuerError:
        raise
    except Exception as exc:
        # Fallos al abrir/cerrar la conexión.
        raise IssuanceError("connect", str(exc) or exc.__class__.__name__) from exc

    if info.decimals != params.decimals:
        logger.warning(
            "Network reports %s decimals (requested %s)", info.decimals, params.decimals
        )

    return MintRecord(
        name=params.name,
        symbol=params.symbol,
        total_supply=params.total_supply,
        decimals=info.decimals,
        mint_address=str(mint),
        ata_address=str(ata),
        premint_amount=params.premint_amount,
        image_url=image_url,
    )


@dataclass
class IssuanceHooks:
    """Callbacks opcionales para la UI."""

    image_published: Callable[[str], None] | None = None
    exported: Callable[[Path], None] | None = None


async def run_issuance(
    *,
    identity: Keypair,
    endpoint: str,
    params: TokenParameters,
    connect: LedgerFactory,
    export: Callable[[MintRecord], Path],
    publisher: ImagePublisher | None = None,
    hooks: IssuanceHooks | None = None,
) -> MintRecord:
    """Publicación de imagen (si hay) -> emisión -> exportación.

    La imagen se sube antes de cualquier llamada al ledger: si el operador pidió
    una imagen y la subida falla, no se crea nada on-chain.
    """

    hooks = hooks or IssuanceHooks()

    image_url: str | None = None
    if params.image_path is not None:
        if publisher is None:
            raise UploadError(
                "An image was provided but PINATA_API_KEY / PINATA_SECRET_API_KEY are not configured."
            )
        image_url = await publisher.publish(params.image_path)
        if hooks.image_published:
            hooks.image_published(image_url)

    record = await issue_token(
        identity=identity,
        endpoint=endpoint,
        params=params,
        connect=connect,
        image_url=image_url,
    )

    logger.info("Mint Information:")
    logger.info("- Name: %s", record.name)
    logger.info("- Symbol: %s", record.symbol)
    logger.info("- Total Supply: %s", record.total_supply)
    logger.info("- Decimals: %s", record.decimals)
    logger.info("- Mint Address: %s", record.mint_address)
    logger.info("- ATA Address: %s", record.ata_address)
    logger.info("- Pre-mint Amount: %s", record.premint_amount)

    path = export(record)
    if hooks.exported:
        hooks.exported(path)
    return record

"""Contrato del servicio de ledger.

Por qué Protocol:
- El orquestador solo necesita seis primitivas; el SDK concreto (solana-py)
  queda en `adapters.solana_ledger`.
- Un stub en memoria basta para verificar el orden de pasos en tests
  (p. ej. que no se crea el mint si el balance es insuficiente).

Todas las operaciones son asíncronas y esperan al nivel de compromiso con el
que se abrió la conexión ("confirmed").
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

from solders.keypair import Keypair
from solders.pubkey import Pubkey


@dataclass(frozen=True)
class MintSnapshot:
    """Estado on-chain de un mint."""

    address: Pubkey
    decimals: int
    supply: int


@runtime_checkable
class LedgerService(Protocol):
    async def get_balance(self, owner: Pubkey) -> int:
        """Balance nativo en lamports."""

        ...

    async def create_mint(
        self,
        *,
        payer: Keypair,
        mint_authority: Pubkey,
        freeze_authority: Pubkey | None,
        decimals: int,
    ) -> Pubkey:
        ...

    async def get_or_create_associated_account(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        owner: Pubkey,
    ) -> Pubkey:
        """Idempotente: reutiliza el ATA si ya existe."""

        ...

    async def mint_to(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        account: Pubkey,
        authority: Keypair,
        amount: int,
    ) -> str:
        """Devuelve la firma de la transacción."""

        ...

    async def get_mint_info(self, mint: Pubkey) -> MintSnapshot:
        ...


LedgerFactory = Callable[[str], AbstractAsyncContextManager[LedgerService]]

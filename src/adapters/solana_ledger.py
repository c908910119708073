"""Adaptador del ledger sobre solana-py / spl-token.

Por qué un wrapper:
- Traduce las respuestas del SDK (`GetBalanceResp`, `MintInfo`, ...) a tipos
  simples del Core (`int`, `Pubkey`, `MintSnapshot`).
- Fija el nivel de compromiso "confirmed" en un único sitio.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.types import TxOpts
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.async_client import AsyncToken
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import get_associated_token_address

from core.interfaces.ledger import LedgerService, MintSnapshot

logger = logging.getLogger(__name__)


class SolanaLedger(LedgerService):
    """Implementación de `LedgerService` para el programa SPL Token."""

    def __init__(self, client: AsyncClient, *, commitment: Commitment = Confirmed) -> None:
        self._client = client
        self._commitment = commitment

    def _token(self, mint: Pubkey, payer: Keypair) -> AsyncToken:
        return AsyncToken(self._client, mint, TOKEN_PROGRAM_ID, payer)

    def _tx_opts(self) -> TxOpts:
        return TxOpts(skip_confirmation=False, preflight_commitment=self._commitment)

    async def get_balance(self, owner: Pubkey) -> int:
        resp = await self._client.get_balance(owner, commitment=self._commitment)
        return resp.value

    async def create_mint(
        self,
        *,
        payer: Keypair,
        mint_authority: Pubkey,
        freeze_authority: Pubkey | None,
        decimals: int,
    ) -> Pubkey:
        token = await AsyncToken.create_mint(
            conn=self._client,
            payer=payer,
            mint_authority=mint_authority,
            decimals=decimals,
            program_id=TOKEN_PROGRAM_ID,
            freeze_authority=freeze_authority,
            skip_confirmation=False,
        )
        return token.pubkey

    async def get_or_create_associated_account(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        owner: Pubkey,
    ) -> Pubkey:
        address = get_associated_token_address(owner, mint)
        existing = await self._client.get_account_info(address, commitment=self._commitment)
        if existing.value is not None:
            logger.debug("Reusing existing associated token account %s", address)
            return address
        return await self._token(mint, payer).create_associated_token_account(
            owner=owner,
            skip_confirmation=False,
        )

    async def mint_to(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        account: Pubkey,
        authority: Keypair,
        amount: int,
    ) -> str:
        resp = await self._token(mint, payer).mint_to(
            dest=account,
            mint_authority=authority,
            amount=amount,
            opts=self._tx_opts(),
        )
        return str(resp.value)

    async def get_mint_info(self, mint: Pubkey) -> MintSnapshot:
        # `payer` no se usa para lecturas; AsyncToken lo exige en el constructor.
        info = await AsyncToken(self._client, mint, TOKEN_PROGRAM_ID, Keypair()).get_mint_info()
        return MintSnapshot(
            address=mint,
            decimals=info.decimals,
            supply=info.supply,
        )


@asynccontextmanager
async def connect_ledger(
    endpoint: str,
    commitment: Commitment = Confirmed,
) -> AsyncIterator[SolanaLedger]:
    """Abre un `AsyncClient` contra `endpoint` y lo cierra al salir."""

    client = AsyncClient(endpoint, commitment=commitment)
    try:
        yield SolanaLedger(client, commitment=commitment)
    finally:
        await client.close()

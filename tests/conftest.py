import json
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from core.config import IssuerSettings
from core.domain.models import LAMPORTS_PER_SOL
from core.interfaces.ledger import MintSnapshot

ENV_VARS = (
    "SECRET_KEYPAIR_PATH",
    "RPC_ENDPOINT",
    "PINATA_API_KEY",
    "PINATA_SECRET_API_KEY",
    "PINATA_API_URL",
    "PINATA_GATEWAY_URL",
    "HTTP_TIMEOUT_SECONDS",
    "TOKEN_NAME",
    "TOKEN_SYMBOL",
    "TOKEN_TOTAL_SUPPLY",
    "TOKEN_PREMINT_AMOUNT",
    "TOKEN_DECIMALS",
    "TOKEN_IMAGE_PATH",
    "OUTPUT_PATH",
)


class StubLedger:
    """Ledger en memoria que registra cada llamada."""

    def __init__(
        self,
        *,
        balance: int = LAMPORTS_PER_SOL,
        confirmed_decimals: int | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.balance = balance
        self.confirmed_decimals = confirmed_decimals
        self.fail_on = fail_on
        self.calls: list[tuple[str, dict]] = []
        self.endpoint: str | None = None
        self.mint: Pubkey | None = None
        self.ata: Pubkey | None = None
        self.requested_decimals: int | None = None
        self.minted: int | None = None

    def _record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))
        if self.fail_on == name:
            raise RuntimeError(f"{name} rejected by node")

    def called(self, name: str) -> bool:
        return any(call == name for call, _ in self.calls)

    async def get_balance(self, owner):
        self._record("get_balance", owner=owner)
        return self.balance

    async def create_mint(self, *, payer, mint_authority, freeze_authority, decimals):
        self._record(
            "create_mint",
            payer=payer,
            mint_authority=mint_authority,
            freeze_authority=freeze_authority,
            decimals=decimals,
        )
        self.mint = Keypair().pubkey()
        self.requested_decimals = decimals
        return self.mint

    async def get_or_create_associated_account(self, *, payer, mint, owner):
        self._record("get_or_create_associated_account", payer=payer, mint=mint, owner=owner)
        self.ata = Keypair().pubkey()
        return self.ata

    async def mint_to(self, *, payer, mint, account, authority, amount):
        self._record("mint_to", payer=payer, mint=mint, account=account, authority=authority, amount=amount)
        self.minted = amount
        return "5sigStub"

    async def get_mint_info(self, mint):
        self._record("get_mint_info", mint=mint)
        decimals = self.confirmed_decimals
        if decimals is None:
            decimals = self.requested_decimals or 0
        return MintSnapshot(address=mint, decimals=decimals, supply=self.minted or 0)


def stub_connect(ledger: StubLedger):
    @asynccontextmanager
    async def connect(endpoint: str):
        ledger.endpoint = endpoint
        yield ledger

    return connect


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def operator() -> Keypair:
    return Keypair()


@pytest.fixture
def keypair_file(tmp_path: Path, operator: Keypair) -> Path:
    path = tmp_path / "id.json"
    path.write_text(json.dumps(list(bytes(operator))), encoding="utf-8")
    return path


@pytest.fixture
def static_env(clean_env, keypair_file: Path):
    clean_env.setenv("SECRET_KEYPAIR_PATH", str(keypair_file))
    clean_env.setenv("RPC_ENDPOINT", "https://api.devnet.solana.com")
    clean_env.setenv("TOKEN_NAME", "Test")
    clean_env.setenv("TOKEN_SYMBOL", "TST")
    clean_env.setenv("TOKEN_TOTAL_SUPPLY", "1000000")
    clean_env.setenv("TOKEN_PREMINT_AMOUNT", "500000")
    clean_env.setenv("TOKEN_DECIMALS", "6")
    return clean_env


def settings_without_dotenv() -> IssuerSettings:
    return IssuerSettings(_env_file=None)

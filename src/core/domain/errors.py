"""Taxonomía de errores del flujo de emisión.

Por qué una jerarquía propia:
- La CLI solo necesita capturar `IssuerError` para decidir el exit code.
- Cada etapa (config, input, upload, ledger, export) tiene su tipo, y la causa
  original viaja encadenada (`raise ... from exc`) para los logs.

Todos los errores son terminales: no hay reintentos ni rollback.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.models import LAMPORTS_PER_SOL


class IssuerError(Exception):
    """Base de todos los errores esperables del flujo."""


class ConfigError(IssuerError):
    """Entorno incompleto o inválido, o keypair ilegible."""


class MissingRequiredError(ConfigError):
    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(f"Missing required environment variables: {', '.join(self.names)}")


class InvalidNumberError(ConfigError):
    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field.upper()} must be a valid number, got {value!r}")


class PremintExceedsSupplyError(ConfigError):
    def __init__(self, premint_amount: int, total_supply: int) -> None:
        self.premint_amount = premint_amount
        self.total_supply = total_supply
        super().__init__(
            f"Pre-mint amount ({premint_amount}) exceeds total supply ({total_supply})"
        )


class KeyLoadError(ConfigError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"Failed to load keypair from path {self.path}: {reason}")


class ValidationError(IssuerError):
    """Un campo introducido por el operador no pasa las reglas."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class UploadError(IssuerError):
    """Fallo al publicar la imagen en el servicio de pinning."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class IssuanceError(IssuerError):
    """Fallo en cualquier interacción con el ledger."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step}: {message}")


class InsufficientFundsError(IssuanceError):
    def __init__(self, balance: int, minimum: int) -> None:
        self.balance = balance
        self.minimum = minimum
        super().__init__(
            "balance_check",
            "Insufficient funds in the wallet. Please ensure your wallet has at least "
            f"{minimum / LAMPORTS_PER_SOL:g} SOL.",
        )


class ExportError(IssuerError):
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"Failed to write {self.path}: {reason}")

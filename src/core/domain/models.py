"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde: un `TokenParameters` construido ya cumple
  `premint_amount <= total_supply`, así que nada llega al ledger sin validar.
- `MintRecord` define el esquema del JSON exportado (aliases camelCase).

Nota:
- Estos modelos describen *qué* se emite, no *cómo* se habla con la red.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator
from pydantic.config import ConfigDict

LAMPORTS_PER_SOL = 1_000_000_000

# Guardia previa de balance (0.1 SOL); no la impone la red.
MIN_BALANCE_LAMPORTS = LAMPORTS_PER_SOL // 10


def raw_amount(amount: int, decimals: int) -> int:
    """Cantidad en unidades base: `amount * 10**decimals` (int de precisión arbitraria)."""

    return amount * 10**decimals


class TokenParameters(BaseModel):
    """Parámetros de un token a emitir, ya validados."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Nombre del token.")
    symbol: str = Field(..., min_length=1, description="Símbolo/ticker del token.")
    total_supply: int = Field(..., gt=0, description="Supply total previsto (unidades enteras).")
    premint_amount: int = Field(
        ...,
        gt=0,
        description="Cantidad inicial que se mintea al operador (<= total_supply).",
    )
    decimals: int = Field(default=9, ge=0, description="Decimales solicitados para el mint.")
    image_path: Path | None = Field(
        default=None,
        description="Imagen local opcional a publicar en IPFS.",
    )

    @field_validator("name", "symbol")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty or whitespace")
        return value

    @field_validator("image_path")
    @classmethod
    def _image_must_exist(cls, value: Path | None) -> Path | None:
        if value is not None and not value.is_file():
            raise ValueError(f"image file not found: {value}")
        return value

    @model_validator(mode="after")
    def _premint_within_supply(self) -> "TokenParameters":
        if self.premint_amount > self.total_supply:
            raise ValueError(
                f"premint_amount ({self.premint_amount}) exceeds total_supply ({self.total_supply})"
            )
        return self


class PinningCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1)
    secret_api_key: str = Field(..., min_length=1)


class MintRecord(BaseModel):
    """Resultado de una emisión completada; se escribe una vez y no se modifica.

    `decimals` es el valor confirmado por la red (puede diferir del solicitado).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., alias="tokenName")
    symbol: str = Field(..., alias="tokenSymbol")
    total_supply: int = Field(..., alias="totalSupply")
    decimals: int = Field(..., ge=0)
    mint_address: str = Field(..., alias="mintAddress")
    ata_address: str = Field(..., alias="ataAddress")
    premint_amount: int = Field(..., alias="preMintAmount")
    image_url: str | None = Field(default=None, alias="tokenImageURL")

    @field_serializer("image_url")
    def _image_url_or_empty(self, value: str | None) -> str:
        return value or ""

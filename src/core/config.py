"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Un único tipo de configuración con campos opcionales para todos los modos
  (mínimo, con Pinata, con parámetros estáticos del token).

Importante: construir `IssuerSettings` no carga el keypair ni valida qué es
obligatorio; eso lo decide `core.services.configuration.ConfigResolver` según
el modo de emisión.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "spl-issuer"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "spl-issuer"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "spl-issuer"
    return Path.home() / ".config" / "spl-issuer"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# spl-issuer user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class IssuanceMode(str, Enum):
    """Origen de los parámetros del token."""

    STATIC = "static"
    INTERACTIVE = "interactive"

    @classmethod
    def from_bool(cls, interactive: bool) -> "IssuanceMode":
        return cls.INTERACTIVE if interactive else cls.STATIC


class IssuerSettings(BaseSettings):
    """Variables de entorno de la aplicación.

    Por qué pydantic-settings:
    - Lee proceso + `.env` (proyecto y usuario) con una sola definición.
    - Los parámetros numéricos del token llegan como texto: el resolver comprueba
      primero qué falta y después los parsea, para reportar el error correcto.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    secret_keypair_path: str | None = Field(
        default=None,
        description="Ruta a un JSON con el array de bytes de la clave secreta.",
    )
    rpc_endpoint: str | None = Field(
        default=None,
        description="URL RPC del cluster Solana.",
    )

    pinata_api_key: str | None = Field(default=None, description="API key de Pinata.")
    pinata_secret_api_key: str | None = Field(default=None, description="Secret API key de Pinata.")
    pinata_api_url: str = Field(
        default="https://api.pinata.cloud",
        min_length=8,
        description="Base URL de la API de pinning.",
    )
    pinata_gateway_url: str = Field(
        default="https://gateway.pinata.cloud",
        min_length=8,
        description="Gateway público para construir la URL de la imagen.",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout de las peticiones HTTP de subida (segundos).",
    )

    # Modo estático: parámetros del token desde el entorno.
    token_name: str | None = Field(default=None)
    token_symbol: str | None = Field(default=None)
    token_total_supply: str | None = Field(default=None)
    token_premint_amount: str | None = Field(default=None)
    token_decimals: str | None = Field(default=None)
    token_image_path: str | None = Field(default=None)

    output_path: Path = Field(
        default=Path("token-details.json"),
        description="Fichero JSON donde se exporta el resultado.",
    )

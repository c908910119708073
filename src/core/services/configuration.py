"""Resolución de la configuración de una ejecución.

Sustituye el patrón "cargar config al importar el módulo y tumbar el proceso":
la CLI llama a `ConfigResolver.resolve()` una vez y recibe un `IssuerConfig`
inmutable o un `ConfigError`. Así el resolver se prueba sin efectos de proceso.

Orden de comprobaciones (la primera que falla gana):
1. variables obligatorias presentes
2. campos numéricos parseables
3. rangos y `premint <= total_supply` (modo estático)
4. carga del keypair

Ninguna de ellas hace llamadas de red.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pydantic import ValidationError as PydanticValidationError
from solders.keypair import Keypair

from adapters.keypair import load_keypair
from core.config import IssuanceMode, IssuerSettings
from core.domain.errors import (
    ConfigError,
    InvalidNumberError,
    KeyLoadError,
    MissingRequiredError,
    PremintExceedsSupplyError,
)
from core.domain.models import PinningCredentials, TokenParameters

logger = logging.getLogger(__name__)

_ALWAYS_REQUIRED = ("secret_keypair_path", "rpc_endpoint")
_STATIC_REQUIRED = (
    "token_name",
    "token_symbol",
    "token_total_supply",
    "token_premint_amount",
    "token_decimals",
)


@dataclass(frozen=True)
class IssuerConfig:
    """Configuración resuelta; de solo lectura durante todo el proceso."""

    keypair: Keypair
    rpc_endpoint: str
    mode: IssuanceMode
    settings: IssuerSettings
    pinning: PinningCredentials | None = None
    token: TokenParameters | None = None

    @property
    def output_path(self) -> Path:
        return self.settings.output_path


_NUMERIC_SETTINGS = frozenset({"http_timeout_seconds"})


def _load_settings(factory: Callable[[], IssuerSettings]) -> IssuerSettings:
    try:
        return factory()
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else "configuration"
        if field in _NUMERIC_SETTINGS:
            raise InvalidNumberError(field, first.get("input")) from exc
        raise ConfigError(f"Invalid {field.upper()}: {first['msg']}") from exc


def _check_required(settings: IssuerSettings, mode: IssuanceMode) -> None:
    names = list(_ALWAYS_REQUIRED)
    if mode is IssuanceMode.STATIC:
        names.extend(_STATIC_REQUIRED)
    missing = [name.upper() for name in names if getattr(settings, name) in (None, "")]
    if missing:
        raise MissingRequiredError(missing)


def _parse_number(field: str, raw: str | None) -> int:
    try:
        return int((raw or "").strip())
    except ValueError as exc:
        raise InvalidNumberError(field, raw) from exc


def _static_token(settings: IssuerSettings) -> TokenParameters:
    total_supply = _parse_number("token_total_supply", settings.token_total_supply)
    premint_amount = _parse_number("token_premint_amount", settings.token_premint_amount)
    decimals = _parse_number("token_decimals", settings.token_decimals)

    for field, value in (
        ("token_total_supply", total_supply),
        ("token_premint_amount", premint_amount),
    ):
        if value <= 0:
            raise InvalidNumberError(field, value)
    if decimals < 0:
        raise InvalidNumberError("token_decimals", decimals)
    if premint_amount > total_supply:
        raise PremintExceedsSupplyError(premint_amount, total_supply)

    try:
        return TokenParameters(
            name=settings.token_name or "",
            symbol=settings.token_symbol or "",
            total_supply=total_supply,
            premint_amount=premint_amount,
            decimals=decimals,
            image_path=Path(settings.token_image_path).expanduser() if settings.token_image_path else None,
        )
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        raise ConfigError(f"Invalid token parameters: {first['msg']}") from exc


def _pinning(settings: IssuerSettings) -> PinningCredentials | None:
    if settings.pinata_api_key and settings.pinata_secret_api_key:
        return PinningCredentials(
            api_key=settings.pinata_api_key,
            secret_api_key=settings.pinata_secret_api_key,
        )
    if settings.pinata_api_key or settings.pinata_secret_api_key:
        logger.warning("Only one of PINATA_API_KEY / PINATA_SECRET_API_KEY is set; image upload disabled.")
    return None


def _keypair(path: str) -> Keypair:
    try:
        return load_keypair(path)
    except (OSError, ValueError) as exc:
        raise KeyLoadError(path, str(exc)) from exc


class ConfigResolver:
    """Resuelve y cachea la configuración de la ejecución.

    La primera resolución correcta es la única: llamadas posteriores devuelven
    el mismo objeto. Un fallo no se cachea y se loguea antes de propagarse
    (salvo `log_failures=False`, usado por `doctor` que ya lo muestra en tabla).
    """

    def __init__(
        self,
        mode: IssuanceMode = IssuanceMode.STATIC,
        *,
        settings_factory: Callable[[], IssuerSettings] = IssuerSettings,
        log_failures: bool = True,
    ) -> None:
        self._mode = mode
        self._settings_factory = settings_factory
        self._log_failures = log_failures
        self._config: IssuerConfig | None = None

    @property
    def mode(self) -> IssuanceMode:
        return self._mode

    def resolve(self) -> IssuerConfig:
        if self._config is not None:
            return self._config

        try:
            self._config = self._build()
        except ConfigError as exc:
            if self._log_failures:
                logger.error("%s", exc)
            raise
        logger.debug("Configuration resolved (mode=%s)", self._mode.value)
        return self._config

    def _build(self) -> IssuerConfig:
        settings = _load_settings(self._settings_factory)
        _check_required(settings, self._mode)
        token = _static_token(settings) if self._mode is IssuanceMode.STATIC else None
        keypair = _keypair(settings.secret_keypair_path or "")

        return IssuerConfig(
            keypair=keypair,
            rpc_endpoint=settings.rpc_endpoint or "",
            mode=self._mode,
            settings=settings,
            pinning=_pinning(settings),
            token=token,
        )

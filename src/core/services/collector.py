"""Recogida interactiva de parámetros del token.

La capa de UI (typer) se inyecta vía `CollectorHooks`, igual que el resto de
servicios: este módulo no imprime ni lee de stdin por sí mismo.

Cada campo se pide hasta que pasa su regla; el pre-mint se valida contra el
total supply recién introducido. No hay llamadas de red aquí.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from core.domain.errors import ValidationError
from core.domain.models import TokenParameters
from core.domain.validation import (
    DEFAULT_DECIMALS,
    parse_int,
    validate_decimals,
    validate_image_path,
    validate_name,
    validate_premint_amount,
    validate_symbol,
    validate_total_supply,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

PromptFn = Callable[[str, str | None], str]


@dataclass
class CollectorHooks:
    """Callbacks de UI: `prompt(label, default) -> str` y `warning(msg)`."""

    prompt: PromptFn
    warning: Callable[[str], None] | None = None
    # Tope de intentos por campo; None = sin límite (modo terminal normal).
    max_attempts: int | None = None


def _ask(hooks: CollectorHooks, label: str, parse: Callable[[str], T], default: str | None = None) -> T:
    attempts = 0
    while True:
        attempts += 1
        raw = hooks.prompt(label, default)
        try:
            return parse(raw)
        except ValidationError as exc:
            logger.debug("Rejected %s: %s", exc.field, exc)
            if hooks.warning:
                hooks.warning(str(exc))
            if hooks.max_attempts is not None and attempts >= hooks.max_attempts:
                raise


def collect_parameters(hooks: CollectorHooks) -> TokenParameters:
    """Pide nombre, símbolo, supply, pre-mint, decimales e imagen opcional."""

    name = _ask(hooks, "Token name", validate_name)
    symbol = _ask(hooks, "Token symbol", validate_symbol)
    total_supply = _ask(
        hooks,
        "Total supply",
        lambda raw: validate_total_supply(parse_int("Total supply", raw)),
    )
    premint_amount = _ask(
        hooks,
        "Pre-mint amount",
        lambda raw: validate_premint_amount(
            parse_int("Pre-mint amount", raw),
            total_supply=total_supply,
        ),
    )
    decimals = _ask(
        hooks,
        "Decimals",
        lambda raw: validate_decimals(parse_int("Decimals", raw)),
        default=str(DEFAULT_DECIMALS),
    )
    image_path = _ask(hooks, "Image path (optional)", validate_image_path, default="")

    return TokenParameters(
        name=name,
        symbol=symbol,
        total_supply=total_supply,
        premint_amount=premint_amount,
        decimals=decimals,
        image_path=image_path,
    )

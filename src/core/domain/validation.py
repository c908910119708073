"""Reglas de validación de parámetros del token.

Por qué funciones sueltas:
- El colector interactivo valida campo a campo (para re-preguntar solo el campo
  que falla) y el modelo `TokenParameters` vuelve a validar el conjunto.
- Ninguna regla hace I/O de red; la única consulta al sistema es la existencia
  del fichero de imagen.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.errors import ValidationError

DEFAULT_DECIMALS = 9


def parse_int(field: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(field, f"{field} must be a whole number, got {raw!r}") from exc


def validate_name(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise ValidationError("name", "Token name cannot be empty.")
    return value


def validate_symbol(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise ValidationError("symbol", "Token symbol cannot be empty.")
    return value


def validate_total_supply(value: int) -> int:
    if value <= 0:
        raise ValidationError("total_supply", "Total supply must be greater than 0.")
    return value


def validate_premint_amount(value: int, *, total_supply: int) -> int:
    """Valida el pre-mint contra el total supply ya aceptado."""

    if value <= 0:
        raise ValidationError("premint_amount", "Pre-mint amount must be greater than 0.")
    if value > total_supply:
        raise ValidationError(
            "premint_amount",
            f"Pre-mint amount ({value}) cannot exceed total supply ({total_supply}).",
        )
    return value


def validate_decimals(value: int) -> int:
    if value < 0:
        raise ValidationError("decimals", "Decimals cannot be negative.")
    return value


def validate_image_path(raw: str | Path | None) -> Path | None:
    """Devuelve `None` si no hay imagen; si la hay, debe ser un fichero local existente."""

    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    path = Path(text).expanduser()
    if not path.is_file():
        raise ValidationError("image_path", f"Image file not found: {path}")
    return path

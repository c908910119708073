"""Carga del keypair del operador (formato `solana-keygen`: JSON array de bytes)."""

from __future__ import annotations

import json
from pathlib import Path

from solders.keypair import Keypair


def load_keypair(path: str | Path) -> Keypair:
    """Lee `path` y deriva el `Keypair`.

    Propaga `OSError` (fichero ausente/ilegible) y `ValueError` (JSON o bytes
    inválidos); el resolver de configuración los envuelve en `KeyLoadError`.
    """

    absolute = Path(path).expanduser().resolve()
    payload = json.loads(absolute.read_text(encoding="utf-8"))
    if not isinstance(payload, list) or not all(isinstance(b, int) for b in payload):
        raise ValueError("expected a JSON array of integers")
    return Keypair.from_bytes(bytes(payload))

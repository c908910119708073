"""Exportación JSON del resultado de la emisión.

Por qué JSON:
- Es el registro local del mint creado (direcciones, decimales confirmados).
- Se sobrescribe en cada ejecución correcta; no se versiona ni se concatena.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from core.domain.errors import ExportError
from core.domain.models import MintRecord

logger = logging.getLogger(__name__)


def export_mint_record_json(*, record: MintRecord, output_path: Path) -> Path:
    """Exporta `MintRecord` a JSON UTF-8 (claves camelCase, indent 2)."""

    payload = record.model_dump(mode="json", by_alias=True)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise ExportError(output_path, str(exc)) from exc
    logger.info("Token details exported to %s", output_path)
    return output_path

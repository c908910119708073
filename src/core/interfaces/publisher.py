"""Contrato del publicador de imágenes (servicio de pinning)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ImagePublisher(Protocol):
    async def publish(self, path: Path) -> str:
        """Sube `path` y devuelve una URL pública resoluble.

        Un único intento; cualquier fallo se reporta como `UploadError`.
        """

        ...

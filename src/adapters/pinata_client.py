"""Publicación de imágenes en IPFS vía Pinata.

Endpoints:
- `POST /pinning/pinFileToIPFS` (multipart, campo `file`) => `{"IpfsHash": ...}`
- `GET /data/testAuthentication` => 200 si las claves son válidas

La URL pública se construye como `<gateway>/ipfs/<IpfsHash>`.
Un único intento por subida; sin reintentos.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.config import ConfigDict

from adapters.http_client import build_async_client
from core.config import IssuerSettings
from core.domain.errors import UploadError
from core.domain.models import PinningCredentials
from core.interfaces.publisher import ImagePublisher

logger = logging.getLogger(__name__)


class PinResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    content_id: str = Field(..., min_length=1, alias="IpfsHash")
    pin_size: int | None = Field(default=None, alias="PinSize")
    timestamp: str | None = Field(default=None, alias="Timestamp")


class PinataPublisher(ImagePublisher):
    """Sube ficheros a Pinata con las dos cabeceras de API key."""

    def __init__(
        self,
        credentials: PinningCredentials,
        settings: IssuerSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._settings = settings or IssuerSettings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return build_async_client(
            self._settings,
            base_url=self._settings.pinata_api_url,
            extra_headers={
                "pinata_api_key": self._credentials.api_key,
                "pinata_secret_api_key": self._credentials.secret_api_key,
            },
            transport=self._transport,
        )

    def gateway_url(self, content_id: str) -> str:
        return f"{self._settings.pinata_gateway_url.rstrip('/')}/ipfs/{content_id}"

    async def publish(self, path: Path) -> str:
        logger.info("Uploading image %s to Pinata...", path)
        try:
            with path.open("rb") as fh:
                async with self._client() as client:
                    response = await client.post(
                        "/pinning/pinFileToIPFS",
                        files={"file": (path.name, fh)},
                    )
        except OSError as exc:
            raise UploadError(f"Cannot read image {path}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise UploadError(f"Image upload failed: {exc}") from exc

        if not response.is_success:
            raise UploadError(
                f"Pinata returned HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            pin = PinResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise UploadError(
                f"Unexpected Pinata response: {exc}",
                status_code=response.status_code,
            ) from exc

        url = self.gateway_url(pin.content_id)
        logger.info("Image pinned: %s", url)
        return url

    async def test_authentication(self) -> tuple[bool, str]:
        """Comprueba las claves (usado por `doctor`)."""

        try:
            async with self._client() as client:
                response = await client.get("/data/testAuthentication")
        except httpx.HTTPError as exc:
            return False, str(exc)
        return response.is_success, f"HTTP {response.status_code}"

"""Download cover images and encode them as data URIs."""

from __future__ import annotations

import base64
import mimetypes
import tempfile
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

import httpx

from cinesync.adapters.http_resilience import ResilientClient
from cinesync.config.http_resilience import ResilienceConfig
from cinesync.domain.errors import AssetError
from cinesync.domain.model import ImageAsset

if TYPE_CHECKING:
    from types import TracebackType

    from cinesync.adapters.http_resilience import ClientFactory

log = getLogger(__name__)

DEFAULT_CONTENT_TYPE: Final[str] = "image/jpeg"
MAX_IMAGE_BYTES: Final[int] = 8 * 1024 * 1024
IMAGE_TIMEOUT_SECONDS: Final[float] = 30.0


def default_image_resilience() -> ResilienceConfig:
    return ResilienceConfig(name="images", timeout_seconds=IMAGE_TIMEOUT_SECONDS)


def encode_data_uri(path: Path, content_type: str) -> ImageAsset:
    data = path.read_bytes()
    if not data:
        raise AssetError(f"Downloaded image {path.name} is empty")
    encoded = base64.b64encode(data).decode("ascii")
    return ImageAsset(
        data_uri=f"data:{content_type};base64,{encoded}",
        content_type=content_type,
        size=len(data),
    )


def _content_type(response: httpx.Response, url: str) -> str:
    header = response.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
    if header.startswith("image/"):
        return header
    if header and header != "application/octet-stream":
        raise AssetError(f"{url} is not an image ({header})")
    guessed, _ = mimetypes.guess_type(url)
    if guessed is not None and guessed.startswith("image/"):
        return guessed
    return DEFAULT_CONTENT_TYPE


class HttpAssetMaterializer:
    """Fetch an image into the scratch area, encode it, and discard the bytes.

    The temporary file lives in a per-call directory that is removed on every exit
    path, including failed downloads.
    """

    def __init__(
        self,
        *,
        scratch_dir: Path,
        resilience: ResilienceConfig | None = None,
        client_factory: ClientFactory | None = None,
        max_bytes: int = MAX_IMAGE_BYTES,
    ) -> None:
        self._scratch_dir = scratch_dir
        self._resilience = resilience or default_image_resilience()
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None
        self._max_bytes = max_bytes

    async def __aenter__(self) -> HttpAssetMaterializer:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def materialize(self, url: str) -> ImageAsset:
        try:
            self._scratch_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.TemporaryDirectory(dir=self._scratch_dir, prefix="asset-") as workdir:
                path = Path(workdir) / "image"
                content_type = await self._download(url, path)
                asset = encode_data_uri(path, content_type)
        except httpx.HTTPError as exc:
            raise AssetError(f"Downloading {url} failed: {exc}") from exc
        except OSError as exc:
            raise AssetError(f"Could not stage image from {url}: {exc}") from exc
        log.debug("Encoded %s (%s, %s bytes)", url, asset.content_type, asset.size)
        return asset

    async def _download(self, url: str, path: Path) -> str:
        response = await self._http().get(url, follow_redirects=True)
        response.raise_for_status()
        content_type = _content_type(response, url)
        if len(response.content) > self._max_bytes:
            raise AssetError(
                f"{url} is {len(response.content)} bytes, over the {self._max_bytes} byte limit"
            )
        path.write_bytes(response.content)
        return content_type

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client

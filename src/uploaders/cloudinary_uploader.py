"""
Cloudinary image host.

Uploads product images with an unsigned upload preset and returns their
secure URLs. A batch either fully succeeds or raises UploadError.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import httpx
from rich.console import Console

from config.settings import UploadConfig
from src.errors import UploadError

console = Console()

# (filename, raw bytes) or a path on disk
ImageFile = Union[tuple[str, bytes], Path]


def _read_file(file: ImageFile) -> tuple[str, bytes]:
    if isinstance(file, Path):
        return file.name, file.read_bytes()
    return file


class ImageHost(ABC):
    """Opaque "store image, return URL" capability."""

    @abstractmethod
    async def upload(self, file: ImageFile) -> str:
        """Upload one image and return its public URL."""

    async def upload_many(self, files: list[ImageFile]) -> list[str]:
        """
        Upload several images in parallel.

        Returns the URLs in the same order as ``files``. If any upload
        fails the whole batch raises UploadError.
        """
        results = await asyncio.gather(
            *(self.upload(f) for f in files), return_exceptions=True
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            first = failures[0]
            raise UploadError(
                f"{len(failures)} of {len(files)} image uploads failed: {first}"
            ) from first
        return list(results)


class CloudinaryUploader(ImageHost):
    """Unsigned uploads to the Cloudinary REST API."""

    def __init__(
        self,
        upload_config: Optional[UploadConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the uploader.

        Args:
            upload_config: Cloud name, preset and folder (defaults from env)
            http_client: Shared AsyncClient; one is created per upload if omitted
        """
        self.config = upload_config or UploadConfig()
        if not self.config.cloud_name or not self.config.upload_preset:
            raise ValueError(
                "Cloudinary configuration is missing. Set CLOUDINARY_CLOUD_NAME "
                "and CLOUDINARY_UPLOAD_PRESET."
            )
        self._http_client = http_client

    async def upload(self, file: ImageFile) -> str:
        filename, content = _read_file(file)
        data = {
            "upload_preset": self.config.upload_preset,
            "folder": self.config.folder,
        }
        files = {"file": (filename, content)}

        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    self.config.upload_url,
                    data=data,
                    files=files,
                    timeout=self.config.timeout_seconds,
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self.config.upload_url,
                        data=data,
                        files=files,
                        timeout=self.config.timeout_seconds,
                    )
        except httpx.HTTPError as e:
            console.print(f"[red]✗ Upload of {filename} failed: {e}[/red]")
            raise UploadError(f"Upload of {filename} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error or "error" in payload:
            error = payload.get("error")
            message = (
                error.get("message") if isinstance(error, dict) else error
            ) or f"HTTP {response.status_code}"
            console.print(f"[red]✗ Upload of {filename} rejected: {message}[/red]")
            raise UploadError(f"Upload of {filename} rejected: {message}")

        url = payload.get("secure_url")
        if not url:
            raise UploadError(f"Upload of {filename} returned no URL")

        console.print(f"[dim]  Uploaded: {filename} -> {url}[/dim]")
        return url

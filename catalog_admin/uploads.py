"""Image upload with progress reporting."""

import mimetypes
import os
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from loguru import logger

from catalog_admin.api.client import StoreClient
from catalog_admin.errors import RemoteError
from catalog_admin.models import ImageUrl

UPLOAD_PATH = "upload"
UPLOAD_FIELD = "image"

ProgressCallback = Callable[[float], None]


class ProgressReader:
    """File wrapper reporting the fraction read so far (0.0 to 1.0)."""

    def __init__(self, fileobj: BinaryIO, total: int, on_progress: ProgressCallback):
        self._file = fileobj
        self.total = total
        self.loaded = 0
        self.on_progress = on_progress

    def read(self, size: int = -1) -> bytes:
        chunk = self._file.read(size)
        self.loaded += len(chunk)
        if chunk or self.loaded >= self.total:
            self.on_progress(self.fraction)
        return chunk

    @property
    def fraction(self) -> float:
        if self.total <= 0:
            return 1.0
        return min(self.loaded / self.total, 1.0)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        position = self._file.seek(offset, whence)
        if whence == os.SEEK_SET:
            self.loaded = position
        return position

    def tell(self) -> int:
        return self._file.tell()


def guess_image_type(path: Path) -> str:
    """Return the image MIME type for ``path``.

    Raises:
        ValueError: If the file is not an image
    """
    content_type, _ = mimetypes.guess_type(path.name)
    if not content_type or not content_type.startswith("image/"):
        raise ValueError("Please select an image file")
    return content_type


def upload_image(
    client: StoreClient,
    path: str | Path,
    on_progress: Optional[ProgressCallback] = None,
) -> ImageUrl:
    """Upload one image and return its public URL.

    Args:
        client: Store client
        path: Local image file
        on_progress: Called with the fraction of bytes sent

    Returns:
        URL reported by the store

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not an image
        CatalogAdminError: If the upload fails
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Image not found: {file_path}")

    content_type = guess_image_type(file_path)
    total = file_path.stat().st_size
    logger.info(f"Uploading {file_path.name} ({total} bytes)")

    with open(file_path, "rb") as f:
        body: BinaryIO = f
        if on_progress is not None:
            body = ProgressReader(f, total, on_progress)  # type: ignore[assignment]
        result = client.upload(UPLOAD_PATH, UPLOAD_FIELD, file_path.name, body, content_type)

    data = result.raise_for_failure()
    url = data.get("url") if isinstance(data, dict) else None
    if not url:
        raise RemoteError("Upload failed", result.status_code)

    logger.success(f"Uploaded {file_path.name}: {url}")
    return ImageUrl(url)

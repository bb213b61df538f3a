"""Event image storage on the local filesystem."""

import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from college_events.config import Settings
from college_events.exceptions import UploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class ImageStorage:
    """
    Stores uploaded event images under the upload directory.

    Files get a generated ``<epoch millis>-<random><ext>`` name which is what
    events keep as their image reference; the app serves the directory at
    ``/uploads``. Stored files are never deleted by the service.
    """

    def __init__(
        self,
        upload_dir: Path,
        allowed_types: list[str],
        max_size: int,
    ) -> None:
        self.upload_dir = upload_dir
        self.allowed_types = allowed_types
        self.max_size = max_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStorage":
        return cls(
            upload_dir=settings.upload_path,
            allowed_types=settings.allowed_mime_types,
            max_size=settings.max_file_size,
        )

    @staticmethod
    def generate_filename(original_name: str | None) -> str:
        suffix = Path(original_name or "").suffix.lower()
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9 - 1)}{suffix}"

    async def save(self, upload: UploadFile) -> str:
        """
        Validate and persist an uploaded image.

        Args:
            upload: The multipart file received with the request

        Returns:
            str: The stored filename

        Raises:
            UploadError: If the MIME type is not allowed or the file is too large
        """
        if upload.content_type not in self.allowed_types:
            logger.warning("Rejected upload with type %s", upload.content_type)
            raise UploadError("Invalid file type")

        content = bytearray()
        while chunk := await upload.read(CHUNK_SIZE):
            content.extend(chunk)
            if len(content) > self.max_size:
                logger.warning("Rejected upload larger than %d bytes", self.max_size)
                raise UploadError(f"File too large (max {self.max_size} bytes)")

        filename = self.generate_filename(upload.filename)
        await run_in_threadpool(self._write, filename, bytes(content))
        logger.info("Stored upload %s (%d bytes)", filename, len(content))
        return filename

    def _write(self, filename: str, content: bytes) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / filename).write_bytes(content)

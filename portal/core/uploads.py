import os
import random
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile
from loguru import logger
from starlette.concurrency import run_in_threadpool

from portal.core.config import Settings
from portal.core.errors import ValidationFailed

_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original_name: str
    content_type: str
    size: int

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")


def _unique_name(original_name: str) -> str:
    base = os.path.basename(original_name or "file").replace(" ", "_") or "file"
    return f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}-{base}"


async def store_upload(file: UploadFile, settings: Settings) -> StoredFile:
    """Write an upload into UPLOAD_DIR and report what was stored."""
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    filename = _unique_name(file.filename)
    target = upload_dir / filename
    size = 0
    too_large = False
    # Disk writes run off the event loop
    out = await run_in_threadpool(target.open, "wb")
    try:
        while True:
            chunk = await file.read(_CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > settings.MAX_UPLOAD_SIZE:
                too_large = True
                break
            await run_in_threadpool(out.write, chunk)
    finally:
        await run_in_threadpool(out.close)

    if too_large:
        target.unlink(missing_ok=True)
        raise ValidationFailed(f"File {file.filename} exceeds the upload limit")

    logger.info("Stored upload {} ({} bytes)", filename, size)
    return StoredFile(
        filename=filename,
        original_name=file.filename or filename,
        content_type=file.content_type or "application/octet-stream",
        size=size,
    )


def remove_stored(filename: str, settings: Settings) -> None:
    (Path(settings.UPLOAD_DIR) / filename).unlink(missing_ok=True)


def discard_upload(stored: StoredFile, settings: Settings) -> None:
    remove_stored(stored.filename, settings)


def public_url(filename: str, settings: Settings, base_url: str = "") -> str:
    base = settings.PUBLIC_BASE_URL or base_url
    return f"{base.rstrip('/')}/uploads/{filename}"

import asyncio
import io
import os

import pytest
from fastapi import UploadFile

from portal.core import uploads
from portal.core.errors import ValidationFailed


def _upload(data: bytes, filename: str = "relatorio final.txt") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename)


def test_store_upload_writes_in_threadpool(settings, monkeypatch) -> None:
    offloaded = []

    async def recording(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return func(*args, **kwargs)

    monkeypatch.setattr(uploads, "run_in_threadpool", recording)

    stored = asyncio.run(uploads.store_upload(_upload(b"linha 1\nlinha 2\n"), settings))

    assert offloaded[0] == "open"
    assert "write" in offloaded
    assert offloaded[-1] == "close"
    assert stored.size == 16
    assert stored.original_name == "relatorio final.txt"
    assert stored.filename.endswith("-relatorio_final.txt")
    assert stored.content_type == "application/octet-stream"
    with open(os.path.join(settings.UPLOAD_DIR, stored.filename), "rb") as fh:
        assert fh.read() == b"linha 1\nlinha 2\n"


def test_oversized_upload_leaves_nothing_behind(settings) -> None:
    small = settings.model_copy(update={"MAX_UPLOAD_SIZE": 4})

    with pytest.raises(ValidationFailed):
        asyncio.run(uploads.store_upload(_upload(b"0123456789"), small))

    assert os.listdir(small.UPLOAD_DIR) == []

"""
===============================================================================
Artb Upload Handling
===============================================================================
Lifecycle of temporary uploaded images.

An uploaded image is written under a generated name, read once, and deleted
before the request returns. ``uploaded_asset`` pairs acquisition and release
so deletion happens on every exit path, including provider failures and
unexpected exceptions.
"""

import logging
import os
import uuid
from contextlib import contextmanager, suppress
from dataclasses import dataclass
from typing import Iterator, Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from utils.errors import NoFileError, StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedAsset:
    path: str
    mime_type: str
    size: int

    def read_bytes(self) -> bytes:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except OSError as e:
            logger.error("Failed to read upload %s: %s", self.path, e)
            raise StorageError("업로드된 파일을 읽을 수 없습니다.") from e


def _stored_name(filename: Optional[str]) -> str:
    _, ext = os.path.splitext(secure_filename(filename or ""))
    return f"{uuid.uuid4().hex}{ext.lower()}"


def acquire(file_storage: Optional[FileStorage], upload_dir: str) -> UploadedAsset:
    """
    Store an uploaded file under a unique name.

    Args:
        file_storage (FileStorage): Multipart field from ``request.files``.
        upload_dir (str): Directory for temporary uploads.

    Returns:
        UploadedAsset: Handle to the stored file.

    Raises:
        NoFileError: If nothing was uploaded.
        StorageError: If the file could not be written.
    """
    if file_storage is None or not file_storage.filename:
        raise NoFileError()

    path = os.path.join(upload_dir, _stored_name(file_storage.filename))
    try:
        os.makedirs(upload_dir, exist_ok=True)
        file_storage.save(path)
        size = os.path.getsize(path)
    except OSError as e:
        logger.error("Failed to store upload at %s: %s", path, e)
        with suppress(OSError):
            os.remove(path)
        raise StorageError("업로드된 파일을 저장할 수 없습니다.") from e

    return UploadedAsset(path=path, mime_type=file_storage.mimetype, size=size)


def release(asset: UploadedAsset) -> None:
    """Delete an uploaded file. Failures are logged, never raised."""
    try:
        os.remove(asset.path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Failed to delete upload %s: %s", asset.path, e)


@contextmanager
def uploaded_asset(file_storage: Optional[FileStorage], upload_dir: str) -> Iterator[UploadedAsset]:
    asset = acquire(file_storage, upload_dir)
    try:
        yield asset
    finally:
        release(asset)

"""Blob storage for uploaded files (local directory served under storage_base_url)"""
import asyncio
import logging
import uuid
from pathlib import Path, PurePath

from faris.core.config import settings
from faris.exceptions import StorageError

logger = logging.getLogger(__name__)


def _safe_name(filename: str | None) -> str:
    name = PurePath((filename or "file").replace("\\", "/")).name.strip()
    return name or "file"


def exam_answer_key(student_id: int, exam_id: int, filename: str | None) -> str:
    """Key of a student's answer file; the random prefix keeps names unique"""
    return f"exam_answers/{student_id}/{exam_id}/{uuid.uuid4().hex}-{_safe_name(filename)}"


def exam_file_key(filename: str | None) -> str:
    return f"exams/{uuid.uuid4().hex}-{_safe_name(filename)}"


def library_file_key(filename: str | None) -> str:
    return f"library/{uuid.uuid4().hex}-{_safe_name(filename)}"


def public_url(key: str) -> str:
    return f"{settings.storage_base_url.rstrip('/')}/{key}"


def _resolve(key: str) -> Path:
    root = Path(settings.storage_dir).resolve()
    path = (root / key).resolve()
    if root not in path.parents:
        raise StorageError("مسار الملف غير صالح.")
    return path


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def put_object(key: str, data: bytes) -> str:
    """Store bytes under `key` and return the public URL"""
    path = _resolve(key)
    try:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _write, path, data)
    except OSError as e:
        logger.error(f"Storage write failed: key={key}, error={e}")
        raise StorageError()
    logger.info(f"Stored object: key={key}, size={len(data)}")
    return public_url(key)


async def delete_object(key: str | None) -> None:
    """Remove the blob; a missing blob is not an error"""
    if not key:
        return
    path = _resolve(key)
    try:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: path.unlink(missing_ok=True))
    except OSError as e:
        logger.error(f"Storage delete failed: key={key}, error={e}")
        raise StorageError()
    logger.info(f"Deleted object: key={key}")

"""Async file helpers for locale files and generated output."""

import json
import shutil
from pathlib import Path
from typing import Any, Iterable, List

import aiofiles
import aiofiles.os
import structlog

from localekit.errors import SchemaError, StorageError

logger = structlog.get_logger(__name__)


async def read_json_file(path: Path) -> Any:
    """Read and decode one JSON file.

    Raises:
        StorageError: the file cannot be read
        SchemaError: the file is not valid JSON
    """
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            content = await f.read()
    except OSError as e:
        raise StorageError(
            f"Error reading {path}: {e}", path=str(path), operation="read", previous_error=e
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise SchemaError(
            f"File {path} is not valid JSON: {e}", path=str(path), previous_error=e
        ) from e


async def write_text_file(path: Path, content: str) -> None:
    """Write ``content`` as UTF-8, replacing the file.

    Raises:
        StorageError: the file cannot be written
    """
    try:
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(content)
    except OSError as e:
        raise StorageError(
            f"Error writing to {path}: {e}", path=str(path), operation="write", previous_error=e
        ) from e


def is_locale_file(path: Path, reserved_files: Iterable[str]) -> bool:
    return path.suffix == ".json" and path.name not in set(reserved_files)


async def list_json_files(directory: Path, reserved_files: Iterable[str]) -> List[Path]:
    """List the locale JSON files of ``directory`` in sorted order.

    Raises:
        StorageError: the directory cannot be listed
    """
    try:
        names = sorted(await aiofiles.os.listdir(directory))
    except OSError as e:
        raise StorageError(
            f"Error reading directory {directory}: {e}",
            path=str(directory),
            operation="listdir",
            previous_error=e,
        ) from e

    reserved = set(reserved_files)
    files = []
    for name in names:
        path = directory / name
        if is_locale_file(path, reserved) and await aiofiles.os.path.isfile(path):
            files.append(path)
    return files


def recreate_directory(directory: Path) -> None:
    """Remove ``directory`` with all its content and create it empty."""
    try:
        if directory.exists():
            shutil.rmtree(directory)
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(
            f"Error preparing directory {directory}: {e}",
            path=str(directory),
            operation="recreate",
            previous_error=e,
        ) from e
    logger.debug("Output directory recreated", dir=str(directory))

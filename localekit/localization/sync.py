"""The ``sync`` pipeline: fill missing keys of every locale from the baseline."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from localekit.config.settings import Settings
from localekit.errors import (
    ErrorContextManager,
    LocaleKitError,
    SchemaError,
    StorageError,
    log_errors,
)

from .merge import KeyMerger, MergeReport
from .ordering import dump_document
from .storage import list_json_files, read_json_file, write_text_file
from .translator import Translator
from .values import is_mapping

logger = structlog.get_logger(__name__)


@dataclass
class SyncSummary:
    """Outcome of one sync run."""

    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    reports: Dict[str, MergeReport] = field(default_factory=dict)
    error_stats: Dict[str, Any] = field(default_factory=dict)


def _single_root_key(data: Any) -> Optional[str]:
    if is_mapping(data) and data:
        return next(iter(data))
    return None


@log_errors(level="error", operation_name="write_locale_file")
async def write_locale_file(path: Path, data: Dict[str, Any], indent: int = 2) -> None:
    await write_text_file(path, dump_document(data, indent=indent))
    logger.info(f"Data written to {path}")


class TranslationSync:
    """Brings every locale file up to date with the baseline file."""

    def __init__(self, settings: Settings, translator: Translator):
        self.settings = settings
        self.translator = translator
        self.failures = ErrorContextManager()
        self.semaphore = asyncio.Semaphore(settings.max_concurrency)

    async def load_baseline(self) -> Dict[str, Any]:
        """Read the baseline file.

        Raises:
            StorageError, SchemaError: the file is unreadable or has no root key
        """
        path = self.settings.baseline_file
        data = await read_json_file(path)
        root = _single_root_key(data)
        if root is None or not is_mapping(data[root]):
            raise SchemaError(f"Root key not found in source file {path}", path=str(path))
        return data

    async def target_files(self) -> List[Path]:
        baseline_name = self.settings.baseline_file.name
        return [
            path
            for path in await list_json_files(self.settings.locales_dir, self.settings.reserved_files)
            if path.name != baseline_name
        ]

    async def sync_file(self, path: Path, baseline: Dict[str, Any]) -> Optional[MergeReport]:
        """Merge, sort and rewrite one locale file.

        Returns:
            The merge report, or None when the file was skipped
        """
        try:
            data = await read_json_file(path)
        except (StorageError, SchemaError) as e:
            logger.error(f"Error reading {path}. Skipping.", error=e.message)
            self.failures.record_error(e, {"file": str(path)})
            return None

        source_language = _single_root_key(baseline)
        destination_language = _single_root_key(data)
        if destination_language is None or not is_mapping(data[destination_language]):
            logger.error("Root keys not found in source or destination file.", file=str(path))
            self.failures.record_error(
                SchemaError("Root key not found in destination file", path=str(path))
            )
            return None

        logger.info(
            f"Source language '{source_language}' to destination language '{destination_language}'"
        )

        merger = KeyMerger(
            self.translator,
            destination_language,
            reserved_keys=self.settings.reserved_keys,
            semaphore=self.semaphore,
            mismatch_policy=self.settings.mismatch_policy,
            failures=self.failures,
            source=str(path),
        )
        try:
            merger.merge(baseline[source_language], data[destination_language])
        except SchemaError as e:
            await merger.cancel()
            logger.error(f"Structure mismatch in {path}. Skipping.", error=e.message)
            self.failures.record_error(e, {"file": str(path)})
            return None

        report = await merger.wait()

        try:
            await write_locale_file(path, data, indent=self.settings.json_indent)
        except StorageError as e:
            self.failures.record_error(e)
            return None

        logger.info(
            "Locale synchronized",
            file=str(path),
            translated=report.translated,
            copied=report.copied,
            fallbacks=report.fallbacks,
            skipped=report.skipped,
        )
        return report

    async def run(self) -> SyncSummary:
        """Sync every target file, one document at a time.

        Raises:
            LocaleKitError: the baseline file or the directory cannot be read
        """
        try:
            baseline = await self.load_baseline()
        except LocaleKitError as e:
            logger.error("Error reading source file. Aborting operation.", error=e.message)
            raise

        summary = SyncSummary()
        for path in await self.target_files():
            report = await self.sync_file(path, baseline)
            if report is None:
                summary.skipped.append(path)
            else:
                summary.written.append(path)
                summary.reports[path.name] = report

        summary.error_stats = self.failures.get_error_stats()
        logger.info(
            "Sync finished",
            written=len(summary.written),
            skipped=len(summary.skipped),
            errors=summary.error_stats["total_errors"],
        )
        return summary

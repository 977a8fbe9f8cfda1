"""Filling the keys a locale lacks relative to the baseline language."""

import asyncio
import copy
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import structlog

from localekit.errors import (
    ErrorContextManager,
    LocaleKitError,
    SchemaError,
    TranslationError,
)

from .translator import Translator
from .values import JsonKind, is_mapping, kind_of

logger = structlog.get_logger(__name__)

MISMATCH_POLICIES = ("skip", "error")


@dataclass
class MergeReport:
    """Counters for one merged document."""

    copied: int = 0
    translated: int = 0
    fallbacks: int = 0
    skipped: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.copied or self.translated or self.fallbacks)


class KeyMerger:
    """Copies or translates missing keys into one target document.

    Translation requests are started as tasks as soon as a missing string
    is found. They belong to this merger only, so ``wait`` joins exactly
    the work of one document. ``merge`` must be called from a running
    event loop.
    """

    def __init__(
        self,
        translator: Translator,
        target_language: str,
        reserved_keys: Iterable[str] = ("am", "pm", "fileSizeTypes"),
        semaphore: Optional[asyncio.Semaphore] = None,
        mismatch_policy: str = "skip",
        failures: Optional[ErrorContextManager] = None,
        source: Optional[str] = None,
    ):
        if mismatch_policy not in MISMATCH_POLICIES:
            raise ValueError(f"Unknown mismatch policy: {mismatch_policy}")

        self.translator = translator
        self.target_language = target_language
        self.reserved_keys = set(reserved_keys)
        self.semaphore = semaphore or asyncio.Semaphore(8)
        self.mismatch_policy = mismatch_policy
        self.failures = failures or ErrorContextManager()
        self.source = source
        self.report = MergeReport()
        self.tasks: List[asyncio.Task] = []

    def merge(self, baseline: Dict[str, Any], target: Dict[str, Any], path: Tuple[str, ...] = ()) -> None:
        """Walk ``baseline`` and schedule the fill of every key ``target`` lacks.

        Raises:
            SchemaError: a key is an object on one side only and the policy is ``error``
        """
        for key, value in baseline.items():
            key_path = path + (key,)
            if key not in target:
                self._fill(target, key, value, key_path)
            elif is_mapping(value) and is_mapping(target[key]):
                self.merge(value, target[key], key_path)
            elif is_mapping(value) or is_mapping(target[key]):
                self._mismatch(key_path, value, target[key])

    def _mismatch(self, key_path: Tuple[str, ...], baseline_value: Any, target_value: Any) -> None:
        dotted = ".".join(key_path)
        if self.mismatch_policy == "error":
            raise SchemaError(
                f"Key '{dotted}' is {kind_of(baseline_value).value} in the baseline "
                f"but {kind_of(target_value).value} in '{self.target_language}'",
                path=self.source,
                key=dotted,
            )
        self.report.skipped += 1
        logger.warning(
            "Skipping key with mismatched structure",
            key=dotted,
            language=self.target_language,
            baseline_kind=kind_of(baseline_value).value,
            target_kind=kind_of(target_value).value,
        )

    def _fill(self, container: Dict[str, Any], key: str, value: Any, key_path: Tuple[str, ...]) -> None:
        if key in self.reserved_keys:
            container[key] = copy.deepcopy(value)
            self.report.copied += 1
            logger.info(f"Added key '{key}' with value '{value}'", language=self.target_language)
            return

        kind = kind_of(value)

        if kind is JsonKind.STRING:
            self._schedule(container, key, value, key_path)
        elif kind is JsonKind.OBJECT:
            container[key] = {}
            self.merge(value, container[key], key_path)
        elif kind is JsonKind.ARRAY:
            items = []
            for index, item in enumerate(value):
                items.append(copy.deepcopy(item))
                if isinstance(item, str):
                    self._schedule(items, index, item, key_path + (str(index),))
            container[key] = items
        else:
            # numbers, booleans and null have nothing to translate
            container[key] = value
            self.report.copied += 1
            logger.info(f"Added key '{key}' with value '{value}'", language=self.target_language)

    def _schedule(self, container: Any, slot: Any, text: str, key_path: Tuple[str, ...]) -> None:
        task = asyncio.create_task(self._translate_into(container, slot, text, key_path))
        self.tasks.append(task)

    async def _translate_into(self, container: Any, slot: Any, text: str, key_path: Tuple[str, ...]) -> None:
        dotted = ".".join(key_path)
        async with self.semaphore:
            try:
                translation = await self.translator.translate(text, self.target_language)
            except Exception as e:
                error = e if isinstance(e, LocaleKitError) else TranslationError(
                    str(e) or type(e).__name__,
                    language_code=self.target_language,
                    previous_error=e,
                )
                self.failures.record_error(
                    error, {"key": dotted, "text": text, "file": self.source}
                )
                logger.error(
                    f"Error translating key '{dotted}' text '{text}'",
                    language=self.target_language,
                    error=str(e),
                )
                container[slot] = text
                self.report.fallbacks += 1
                logger.info(f"Added key '{dotted}' with value '{text}'", language=self.target_language)
                return

        logger.info(f'Translated "{text}" to {self.target_language}: "{translation}"')
        container[slot] = translation
        self.report.translated += 1

    async def wait(self) -> MergeReport:
        """Join every scheduled translation, tolerating individual failures."""
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        return self.report

    async def cancel(self) -> None:
        """Cancel the scheduled translations of an abandoned document."""
        for task in self.tasks:
            task.cancel()
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)

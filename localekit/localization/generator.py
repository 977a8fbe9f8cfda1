"""The ``generate`` pipeline: locale JSON -> JS modules and type declarations."""

from typing import List, Optional

import structlog

from localekit.config.settings import Settings
from localekit.errors import CompletenessError, SchemaError

from .emitter import ModuleEmitter
from .loader import (
    LocaleSet,
    MissingTranslation,
    find_all_keys,
    find_missing_translations,
    load_locale_set,
    report_missing_translations,
)
from .typegen import render_locale_interface

logger = structlog.get_logger(__name__)


class ModuleGenerator:
    """Validates the locale files and regenerates both output directories."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.emitter = ModuleEmitter(settings.esm_dir, settings.cjs_dir)
        self.locale_set: Optional[LocaleSet] = None

    def check_completeness(self, locale_set: LocaleSet) -> List[MissingTranslation]:
        """Report every missing or empty translation, then raise if there were any.

        Raises:
            CompletenessError: after the full report has been logged
        """
        missing = find_missing_translations(find_all_keys(locale_set), locale_set)
        if report_missing_translations(missing):
            raise CompletenessError(
                f"{len(missing)} translation(s) missing or empty", missing=missing
            )
        return missing

    async def generate(self) -> List:
        """Run the pipeline and return the written paths.

        Raises:
            SchemaError: malformed locale file or missing baseline language
            CompletenessError: a language lacks translations
            StorageError: the locale directory or an output file is not accessible
        """
        baseline = self.settings.baseline_language

        locale_set = await load_locale_set(self.settings.locales_dir, self.settings.reserved_files)
        self.locale_set = locale_set

        self.check_completeness(locale_set)

        if baseline not in locale_set:
            raise SchemaError(f"Missing messages for base locale <{baseline}>", key=baseline)

        locale_type = render_locale_interface(locale_set.get(baseline))

        self.emitter.prepare_output_dirs()
        written = await self.emitter.write_all(locale_set, locale_type)

        logger.info("Generated locale modules", languages=len(locale_set), files=len(written))
        return written

    async def run(self) -> int:
        """Run the pipeline and map failures to an exit code."""
        try:
            await self.generate()
        except CompletenessError as e:
            logger.error("Missing translations, nothing generated", missing=len(e.missing))
            return 1
        except SchemaError as e:
            logger.error("Error generating script file", error=e.message, **e.context)
            return 1
        return 0

"""Loading and completeness validation of locale files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Set, Tuple

import structlog

from localekit.errors import SchemaError

from .storage import list_json_files, read_json_file
from .values import LocaleDocument, is_empty_message, is_mapping

logger = structlog.get_logger(__name__)


@dataclass
class MissingTranslation:
    """A key that a language lacks or leaves empty."""

    language: str
    key: str
    reason: str  # "missing" or "empty"

    def describe(self) -> str:
        if self.reason == "missing":
            return f"Language <{self.language}> is missing translation for key {self.key}"
        return f"Language <{self.language}> has an empty translation for key {self.key}"


@dataclass
class LocaleSet:
    """Locale documents by language code, with the file each came from."""

    documents: Dict[str, LocaleDocument] = field(default_factory=dict)
    paths: Dict[str, Path] = field(default_factory=dict)

    def add(self, language_code: str, document: LocaleDocument, path: Path) -> None:
        if language_code in self.documents:
            raise SchemaError(
                f"Files {self.paths[language_code]} and {path} both define language '{language_code}'",
                path=str(path),
                key=language_code,
            )
        self.documents[language_code] = document
        self.paths[language_code] = path

    def languages(self) -> List[str]:
        """Language codes in sorted order."""
        return sorted(self.documents)

    def items(self) -> List[Tuple[str, LocaleDocument]]:
        return [(code, self.documents[code]) for code in self.languages()]

    def get(self, language_code: str):
        return self.documents.get(language_code)

    def __contains__(self, language_code: str) -> bool:
        return language_code in self.documents

    def __len__(self) -> int:
        return len(self.documents)


def language_code_for(path: Path) -> str:
    """``pt-br.json`` -> ``pt_br``."""
    return root_key_for(path).replace("-", "_")


def root_key_for(path: Path) -> str:
    """The key a locale file must wrap its messages in: its base name."""
    name = Path(path).name
    return name[:-len(".json")] if name.endswith(".json") else Path(path).stem


async def load_locale_file(path: Path) -> Tuple[str, LocaleDocument]:
    """Load one locale file and unwrap its single root key.

    Returns:
        Tuple of language code and locale document

    Raises:
        SchemaError: the file is not ``{"<basename>": {...}}``
    """
    root_key = root_key_for(path)
    language_code = language_code_for(path)

    data = await read_json_file(path)

    if not is_mapping(data):
        raise SchemaError(f"File {path} must contain an object", path=str(path))

    if list(data.keys()) != [root_key]:
        raise SchemaError(
            f"File {path} must contain an object with only one key '{root_key}'",
            path=str(path),
            key=root_key,
        )

    document = data[root_key]
    if not is_mapping(document):
        raise SchemaError(
            f"File {path} must map '{root_key}' to an object of messages",
            path=str(path),
            key=root_key,
        )

    return language_code, document


async def load_locale_set(directory: Path, reserved_files: Iterable[str]) -> LocaleSet:
    """Load every locale file in ``directory``.

    Raises:
        SchemaError: any file has the wrong shape (aborts the whole load)
        StorageError: the directory or a file cannot be read
    """
    locale_set = LocaleSet()
    for path in await list_json_files(directory, reserved_files):
        language_code, document = await load_locale_file(path)
        locale_set.add(language_code, document, path)
        logger.info("Loaded locale", language=language_code, file=str(path), keys=len(document))
    return locale_set


def find_all_keys(locale_set: LocaleSet) -> Set[str]:
    """Union of the top-level message keys of every language."""
    all_keys: Set[str] = set()
    for document in locale_set.documents.values():
        all_keys.update(document.keys())
    return all_keys


def find_missing_translations(all_keys: Set[str], locale_set: LocaleSet) -> List[MissingTranslation]:
    """Every (language, key) pair that is absent, null or the empty string."""
    missing = []
    for language_code, document in locale_set.items():
        for key in sorted(all_keys):
            if key not in document:
                missing.append(MissingTranslation(language_code, key, "missing"))
            elif is_empty_message(document[key]):
                missing.append(MissingTranslation(language_code, key, "empty"))
    return missing


def report_missing_translations(missing: List[MissingTranslation]) -> bool:
    """Log one line per missing translation. Returns True if any were reported."""
    for entry in missing:
        logger.error(entry.describe(), language=entry.language, key=entry.key, reason=entry.reason)
    return bool(missing)

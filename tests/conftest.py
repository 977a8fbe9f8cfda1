"""
Pytest configuration and fixtures for localekit tests.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional, Tuple

import pytest

from localekit.config.settings import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Settings:
    """Create test configuration pointing at the temporary directory."""
    return Settings(
        _env_file=None,
        locales_dir=temp_dir,
        translate_api_key="test_key",
        max_concurrency=4,
    )


@pytest.fixture
def write_locale(temp_dir: Path) -> Callable[..., Path]:
    """Write ``{"<name>": messages}`` to ``<name>.json`` in the temporary directory."""

    def _write(name: str, messages: Any, root_key: Optional[str] = None, raw: Optional[str] = None) -> Path:
        path = temp_dir / f"{name}.json"
        if raw is not None:
            path.write_text(raw, encoding="utf-8")
        else:
            content = {root_key if root_key is not None else name: messages}
            path.write_text(json.dumps(content, indent=2, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_locale() -> Callable[[Path], Dict[str, Any]]:
    """Decode a written locale file."""
    return lambda path: json.loads(path.read_text(encoding="utf-8"))


class FakeTranslator:
    """Translator double: tags text with the target language, fails on chosen texts."""

    def __init__(self, fail_on: Tuple[str, ...] = ()):
        self.fail_on = set(fail_on)
        self.calls: List[Tuple[str, str]] = []

    async def translate(self, text: str, target_language: str) -> str:
        self.calls.append((text, target_language))
        if text in self.fail_on:
            raise RuntimeError(f"cannot translate {text!r}")
        return f"[{target_language}] {text}"


class FailingTranslator:
    """Translator double that always fails, so every text falls back to the source."""

    def __init__(self):
        self.calls: List[Tuple[str, str]] = []

    async def translate(self, text: str, target_language: str) -> str:
        self.calls.append((text, target_language))
        raise ConnectionError("network unreachable")


@pytest.fixture
def fake_translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def make_translator() -> Callable[..., FakeTranslator]:
    """Build a FakeTranslator failing on the given source texts."""
    return lambda *fail_on: FakeTranslator(fail_on=fail_on)


@pytest.fixture
def failing_translator() -> FailingTranslator:
    return FailingTranslator()

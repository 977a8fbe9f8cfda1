"""Settings for the localekit commands."""

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"


class Settings(BaseSettings):
    """Configuration shared by ``generate`` and ``sync``.

    Values come from keyword arguments, ``LOCALEKIT_*`` environment
    variables and an optional ``.env`` file, in that order of precedence.
    """

    # Directories
    locales_dir: Path = Path(".")
    esm_dir: Optional[Path] = None
    cjs_dir: Optional[Path] = None

    # Locale schema
    baseline_language: str = "en"
    reserved_files: List[str] = ["package.json", "package-lock.json", "tsconfig.json"]
    reserved_keys: List[str] = ["am", "pm", "fileSizeTypes"]

    # Translation API
    translate_api_url: str = GOOGLE_TRANSLATE_URL
    translate_api_key: SecretStr = SecretStr("")
    translate_timeout: float = Field(default=10.0, gt=0)
    translate_max_attempts: int = Field(default=1, ge=1)
    max_concurrency: int = Field(default=8, ge=1)
    mismatch_policy: Literal["skip", "error"] = "skip"

    # Output
    json_indent: int = Field(default=2, ge=0)
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="LOCALEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("baseline_language")
    @classmethod
    def normalize_baseline(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("baseline_language must not be empty")
        return v

    @model_validator(mode="after")
    def default_output_dirs(self) -> "Settings":
        if self.esm_dir is None:
            self.esm_dir = self.locales_dir / "js"
        if self.cjs_dir is None:
            self.cjs_dir = self.locales_dir / "cjs"
        return self

    @property
    def baseline_file(self) -> Path:
        return self.locales_dir / f"{self.baseline_language}.json"

    @property
    def has_api_key(self) -> bool:
        return bool(self.translate_api_key.get_secret_value())

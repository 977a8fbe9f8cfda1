"""Build a validated Settings instance."""

from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from localekit.errors import ConfigurationError

from .settings import Settings

logger = structlog.get_logger(__name__)


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """Load settings from the environment, an env file and explicit overrides.

    Overrides whose value is ``None`` are ignored so that unset CLI options
    fall through to the environment.

    Raises:
        ConfigurationError: if the env file is missing or a value is invalid.
    """
    values = {k: v for k, v in overrides.items() if v is not None}

    if config_file is not None and not config_file.is_file():
        raise ConfigurationError(
            f"Configuration file not found: {config_file}", config_key="config_file"
        )

    try:
        if config_file is not None:
            settings = Settings(_env_file=config_file, **values)
        else:
            settings = Settings(**values)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_key=key or None, previous_error=e
        ) from e

    logger.debug(
        "Configuration loaded",
        locales_dir=str(settings.locales_dir),
        baseline_language=settings.baseline_language,
        max_concurrency=settings.max_concurrency,
    )
    return settings

"""Command line entry point for localekit."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from localekit import __version__
from localekit.config import Settings, load_config
from localekit.errors import ConfigurationError, LocaleKitError
from localekit.localization import GoogleTranslator, ModuleGenerator, TranslationSync


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging."""
    level = logging.DEBUG if debug else logging.INFO

    # Clear any existing handlers to prevent duplication
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.dev.ConsoleRenderer(colors=True)
                if debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="localekit",
        description="Generate locale modules and synchronize translation files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"localekit {__version__}")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("--config-file", type=Path, help="Path to an env file with LOCALEKIT_* settings")
    parser.add_argument("-d", "--locales-dir", type=Path, help="Directory containing <lang>.json files")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", help="Validate locales and write JS modules with type declarations"
    )
    generate.add_argument("--esm-dir", type=Path, help="Output directory for ES modules")
    generate.add_argument("--cjs-dir", type=Path, help="Output directory for CommonJS modules")

    sync = subparsers.add_parser(
        "sync", help="Translate keys missing from locale files using the baseline file"
    )
    sync.add_argument("-l", "--baseline", dest="baseline_language", help="Baseline language code")
    sync.add_argument("--concurrency", dest="max_concurrency", type=int, help="Maximum parallel requests")
    sync.add_argument(
        "--mismatch-policy",
        choices=["skip", "error"],
        help="What to do when a key is an object on one side only",
    )

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        "debug": args.debug,
        "locales_dir": args.locales_dir,
    }
    for option in ("esm_dir", "cjs_dir", "baseline_language", "max_concurrency", "mismatch_policy"):
        overrides[option] = getattr(args, option, None)
    return load_config(args.config_file, **overrides)


async def run_generate(settings: Settings) -> int:
    return await ModuleGenerator(settings).run()


async def run_sync(settings: Settings) -> int:
    if not settings.has_api_key:
        raise ConfigurationError(
            "Set LOCALEKIT_TRANSLATE_API_KEY to use the translation API",
            config_key="translate_api_key",
        )

    async with GoogleTranslator(
        settings.translate_api_key.get_secret_value(),
        api_url=settings.translate_api_url,
        timeout=settings.translate_timeout,
        max_attempts=settings.translate_max_attempts,
    ) as translator:
        await TranslationSync(settings, translator).run()
    return 0


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ConfigurationError as e:
        setup_logging(debug=bool(args.debug))
        structlog.get_logger().error("Invalid configuration", **e.to_dict())
        return 1

    setup_logging(debug=settings.debug)
    logger = structlog.get_logger()

    try:
        logger.info("Running command", command=args.command, locales_dir=str(settings.locales_dir))

        if args.command == "generate":
            return await run_generate(settings)
        return await run_sync(settings)

    except LocaleKitError as e:
        logger.error("Command failed", command=args.command, **e.to_dict())
        return 1


def run() -> None:
    """Synchronous entry point for the console script."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()

"""CLI for uploading and downloading objects."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import pydantic
from loguru import logger

from objstore.exceptions import ConfigurationError, ObjstoreError
from objstore.logging_config import setup_logging
from objstore.settings import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH, LoggingSettings, Settings
from objstore.storage import build_storage

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="objstore", description="Upload and download objects to S3")
    parser.add_argument("--config", type=Path, help="YAML settings file (default: $OBJSTORE_CONFIG or config/default.yaml)")
    parser.add_argument("--backend", choices=["s3", "local", "recording"], help="Override the configured storage backend")
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    commands = parser.add_subparsers(dest="command", required=True)

    upload = commands.add_parser("upload", help="Upload a local file to bucket/key")
    upload.add_argument("local_path", type=Path)
    upload.add_argument("bucket")
    upload.add_argument("key")

    download = commands.add_parser("download", help="Download bucket/key to a local file")
    download.add_argument("bucket")
    download.add_argument("key")
    download.add_argument("local_path", type=Path)

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    # A missing default file means built-in defaults; an explicit path must exist
    if args.config is not None:
        settings = Settings.load(args.config)
    elif os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH.exists():
        settings = Settings.load()
    else:
        settings = Settings()

    updates = {}
    if args.backend:
        updates["storage"] = settings.storage.model_copy(update={"backend": args.backend})
    if args.log_level or args.json_logs:
        overrides = {
            **settings.logging.model_dump(),
            "level": args.log_level or settings.logging.level,
            "json_format": args.json_logs or settings.logging.json_format,
        }
        try:
            updates["logging"] = LoggingSettings.model_validate(overrides)
        except pydantic.ValidationError as exc:
            raise ConfigurationError(
                f"Invalid logging override: {args.log_level}", {"log_level": str(args.log_level)}
            ) from exc
    return settings.model_copy(update=updates) if updates else settings


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = _load_settings(args)
        setup_logging(
            level=settings.logging.level,
            json_format=settings.logging.json_format,
            log_file=Path(settings.logging.log_file) if settings.logging.log_file else None,
        )
        storage = build_storage(settings.storage)
    except ConfigurationError as exc:
        print(f"objstore: configuration error: {exc.message}", file=sys.stderr)
        return EXIT_CONFIG
    except ValueError as exc:
        # loguru and botocore reject bad levels and endpoint URLs with ValueError
        print(f"objstore: configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    try:
        if args.command == "upload":
            storage.upload(args.local_path, args.bucket, args.key)
        else:
            storage.download(args.bucket, args.key, args.local_path)
    except ObjstoreError as exc:
        logger.debug("{command} failed with {error}", command=args.command, error=type(exc).__name__)
        context = ", ".join(f"{k}={v}" for k, v in exc.details.items())
        print(f"objstore: {exc.message}" + (f" ({context})" if context else ""), file=sys.stderr)
        return EXIT_FAILED

    logger.info("{command} complete", command=args.command)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

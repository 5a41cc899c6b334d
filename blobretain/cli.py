"""
Command line entry point.

Usage:
    python -m blobretain report [--container NAME] [--output-dir DIR] [--delete-excess]
    python -m blobretain remove NAME [NAME ...] [--names-file FILE] [--container NAME]

Examples:
    python -m blobretain report --container web
    python -m blobretain report --provider local --local-root ./storage --container assets
    python -m blobretain remove main.0c00150a9fdeef81.js main.0c00150a9fdeef81.js.gz
"""

import argparse
import asyncio
from typing import List, Optional, Tuple

from loguru import logger
from pydantic import ValidationError

from .config.settings import LoggingConfig, RetentionConfig, RetentionOrder, StorageConfig
from .exceptions import ConfigurationException
from .pipeline import EXIT_FAILURE, RetentionPipeline
from .utils.logging_config import log_manager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blobretain",
        description="Group blobs by base name, report all but the newest files per group, and optionally delete them",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--container", help="Container name (overrides AZURE_STORAGE_CONTAINER_NAME)")
    common.add_argument("--provider", choices=["azure", "local"], help="Storage provider (overrides STORAGE_PROVIDER)")
    common.add_argument("--local-root", help="Root directory for the local provider (overrides STORAGE_LOCAL_ROOT)")
    common.add_argument("--log-level", help="Log level (overrides LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    report = subparsers.add_parser("report", parents=[common], help="Write retention reports for a container")
    report.add_argument("--output-dir", help="Directory for the report files (overrides OUTPUT_DIR)")
    report.add_argument(
        "--retention-order",
        choices=[order.value for order in RetentionOrder],
        help="Order used to pick the newest files of a group (overrides RETENTION_ORDER)",
    )
    report.add_argument("--delete-excess", action="store_true", help="Delete the excess files after reporting")

    remove = subparsers.add_parser("remove", parents=[common], help="Delete an explicit list of blobs")
    remove.add_argument("names", nargs="*", help="Blob names to delete")
    remove.add_argument("--names-file", help="File with one blob name per line")

    return parser


def build_configs(args: argparse.Namespace) -> Tuple[StorageConfig, RetentionConfig, LoggingConfig]:
    """Load configuration from the environment and apply command line overrides."""
    try:
        storage = StorageConfig()
        retention = RetentionConfig()
        logging_config = LoggingConfig()

        if args.container:
            storage.container_name = args.container
        if args.provider:
            storage.provider = args.provider
        if args.local_root:
            storage.local_root = args.local_root
        if args.log_level:
            logging_config.level = args.log_level
        if getattr(args, "output_dir", None):
            retention.output_dir = args.output_dir
        if getattr(args, "retention_order", None):
            retention.order = RetentionOrder(args.retention_order)
    except ValidationError as e:
        raise ConfigurationException(f"Invalid configuration: {e}") from e

    return storage.require(), retention, logging_config


def read_names(names: List[str], names_file: Optional[str]) -> List[str]:
    collected = list(names)
    if names_file:
        with open(names_file, "r", encoding="utf-8") as f:
            collected.extend(line.strip() for line in f if line.strip())
    return collected


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # Console sink at INFO until the configured level has been validated
    log_manager.enable_console("INFO")

    try:
        storage, retention, logging_config = build_configs(args)
        log_manager.configure(logging_config)
        pipeline = RetentionPipeline(storage, retention)
    except ConfigurationException as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_FAILURE

    if args.command == "remove":
        try:
            names = read_names(args.names, args.names_file)
        except OSError as e:
            logger.error(f"Could not read names file {args.names_file}: {e}")
            asyncio.run(pipeline.provider.close())
            return EXIT_FAILURE
        return asyncio.run(pipeline.remove(names))

    return asyncio.run(pipeline.run(delete_excess=args.delete_excess))

"""Command line entry point for publishing release content to content gateway."""

import argparse
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from cgw_publisher.config import Settings
from cgw_publisher.errors import CgwPublisherError
from cgw_publisher.services.pipeline import PublishPipeline
from cgw_publisher.utils.logging import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cgw-publish",
        description="Generate content gateway metadata for a content directory "
        "and publish it with push-cgw-metadata.",
    )
    parser.add_argument(
        "--data-path", required=True, type=Path,
        help="JSON data file containing the contentGateway section",
    )
    parser.add_argument(
        "--content-dir", required=True, type=Path,
        help="Directory with the files to publish",
    )
    parser.add_argument(
        "--result-path-file", type=Path, default=None,
        help="File that receives the path of results.json",
    )
    parser.add_argument(
        "--hostname", default=None,
        help="Content gateway admin endpoint (overrides CGW_HOSTNAME)",
    )
    parser.add_argument(
        "--publisher-command", default=None,
        help="Publisher executable (overrides CGW_PUBLISHER_COMMAND)",
    )
    parser.add_argument(
        "--fail-on-publish-error", action="store_true", default=None,
        help="Exit non-zero when the publisher reports failure",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Write metadata and results without invoking the publisher",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Logging level (overrides CGW_LOG_LEVEL)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Load settings from the environment, then apply CLI overrides."""
    overrides = {
        "hostname": args.hostname,
        "publisher_command": args.publisher_command,
        "fail_on_publish_error": args.fail_on_publish_error,
        "log_level": args.log_level,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[list[str]] = None) -> int:
    """Run a publish and return the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        # Log level and log file come from settings, so fall back to console
        setup_logger("cgw_publisher").error(f"Invalid configuration: {e}")
        return 1

    level = logging.getLevelName(settings.log_level.upper())
    logger = setup_logger(
        "cgw_publisher",
        settings.log_file,
        level=level if isinstance(level, int) else logging.INFO,
    )

    pipeline = PublishPipeline(settings, dry_run=args.dry_run)
    try:
        result = pipeline.run(args.data_path, args.content_dir, args.result_path_file)
    except (CgwPublisherError, OSError) as e:
        logger.error(f"Publish to CGW failed: {e}")
        return 1

    logger.info(f"Processed {result.no_of_files_processed} files for CGW")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

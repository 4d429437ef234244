"""Shared command-line plumbing for the stage scripts.

Every script under ``scripts/`` is a thin wrapper: it builds a parser with
``build_parser``, then hands its stage function to ``run_stage``, which
configures logging and turns any PipelineError into a logged error and
exit status 1.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from forest_routes.config import load_pipeline_config, resolve_data_dir
from forest_routes.errors import PipelineError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Log to stdout at INFO, or DEBUG with --verbose."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser(description: str, epilog: Optional[str] = None) -> argparse.ArgumentParser:
    """Parser with the options every stage script accepts."""
    parser = argparse.ArgumentParser(
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the source datasets and the artifact "
             "(default: data_dir from config/pipeline_config.json, else data/)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> tuple[dict, Path]:
    """Return (pipeline config, data directory) honouring --data-dir."""
    config = load_pipeline_config()
    data_dir = args.data_dir if args.data_dir is not None else resolve_data_dir(config)
    logger.debug("Data directory: %s", data_dir)
    return config, data_dir


def run_stage(
    stage: Callable[[argparse.Namespace], None],
    parser: argparse.ArgumentParser,
    argv: Optional[list[str]] = None,
) -> None:
    """Parse arguments, configure logging and run ``stage``.

    Exits with status 1 if the stage raises PipelineError.
    """
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        stage(args)
    except PipelineError as exc:
        logger.error("%s", exc)
        sys.exit(1)

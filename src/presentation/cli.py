"""CLI interface for the archive job pipeline."""
import sys
import json
import argparse
import logging
from pathlib import Path

from domain.exceptions import DomainException
from application.service import process_event
from infrastructure.config import ConfigLoader
from shared.logging import get_logger, set_level


def read_event(source: str) -> dict:
    """Load a job event from a JSON file, or from stdin when source is '-'."""
    if source == '-':
        return json.load(sys.stdin)
    with open(source, 'r', encoding='utf-8') as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Download S3 objects, zip them, upload the archive and send notifications"
    )
    parser.add_argument('--event', '-e', required=True,
                        help='Job event JSON file ({"auth": ..., "data": ...}), or - for stdin')
    parser.add_argument('--auth', help='Auth token (overrides the "auth" field of the event)')
    parser.add_argument('--config', type=Path, help='Config YAML file')
    parser.add_argument('--invocation-id', help='Scratch directory name for this run')
    parser.add_argument('--scratch-dir', type=Path, help='Base directory for scratch space')
    parser.add_argument('--archiver', choices=['auto', 'zip', 'native'], help='Archiver backend')
    parser.add_argument('--sequential', action='store_true',
                        help='One download and one notification at a time')
    parser.add_argument('--validate-headers', action='store_true',
                        help='HEAD every source before downloading')
    parser.add_argument('--cleanup', action='store_true',
                        help='Remove the scratch directory when the job ends')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose')
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logger = get_logger(__name__)
    if args.verbose:
        set_level(logging.DEBUG)

    try:
        overrides = {
            'scratch_base': args.scratch_dir,
            'archiver': args.archiver,
            'sequential': True if args.sequential else None,
            'validate_headers': True if args.validate_headers else None,
            'cleanup_scratch': True if args.cleanup else None,
            'log_level': 'DEBUG' if args.verbose else None,
        }
        config = ConfigLoader(config_path=args.config).load(overrides=overrides)
        set_level(config.log_level)

        event = read_event(args.event)
        if args.auth is not None and isinstance(event, dict):
            event['auth'] = args.auth

        result = process_event(event, config, invocation_id=args.invocation_id)

        logger.info("=" * 60)
        if result.success:
            logger.info("Archive job completed successfully")
            logger.info(f"Location: {result.location}")
            logger.info(f"Size: {result.size_bytes} bytes")
            return 0

        logger.error("Archive job failed")
        for error in result.errors:
            logger.error(f"  - {error}")
        return 1

    except DomainException as e:
        logger.error(f"Pipeline error: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read event: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())

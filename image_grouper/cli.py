# image_grouper/cli.py

import argparse
from image_grouper.config import ConfigError, ScanConfig, SystemConfig
from image_grouper.main import run
from image_grouper.utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-grouper",
        description="Group visually similar images and optionally delete the copies"
    )
    parser.add_argument('directory', help='Input directory')
    parser.add_argument('-t', '--threshold', type=float, default=10.0,
                        help='Threshold for image grouping (0-100)')
    parser.add_argument('-d', '--delete', action='store_true',
                        help='Delete similar files to the first one')
    parser.add_argument('-w', '--workers', type=int,
                        help='Number of worker threads (default: from config, '
                             'else one per CPU)')
    parser.add_argument('-c', '--config', default='config.yaml',
                        help='YAML configuration file')
    parser.add_argument('--log-level',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Override the configured log level')
    parser.add_argument('--no-progress', action='store_true',
                        help='Disable the progress bar')
    return parser


def main_cli(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        system = SystemConfig.load(args.config)
        scan = ScanConfig(
            root_path=args.directory,
            threshold=args.threshold,
            delete=args.delete
        )
    except ConfigError as e:
        parser.error(str(e))

    if args.workers is not None:
        if args.workers < 1:
            parser.error("--workers must be at least 1")
        system.n_workers = args.workers
    if args.log_level:
        system.log_level = args.log_level
    if args.no_progress:
        system.show_progress = False

    setup_logging(system)

    # Deletion errors propagate and end the run
    run(scan, system)


if __name__ == "__main__":
    main_cli()

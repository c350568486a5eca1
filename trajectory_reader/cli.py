"""
Command-line interface for trajectory reading.

Usage:
    trajectory-read [TRAJECTORY] [--accuracy PATH] [--format FORMAT]
                    [--config CONFIG] [--header-lines N] [--limit N]
                    [--summary] [-v]
"""

import argparse
import itertools
import logging
import sys
from typing import Iterable, List, Optional

from .config import FILE_FORMATS, ReaderConfig
from .errors import TrajectoryError
from .loader import read_trajectory
from .records import Record

COLUMNS = (
    'time', 'latitude', 'longitude', 'height', 'roll', 'pitch', 'heading',
    'north_sd', 'east_sd', 'down_sd',
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def _fmt(value: Optional[float]) -> str:
    return '' if value is None else repr(value)


def format_record(record: Record) -> str:
    """One comma-separated line per record, empty cells for missing values."""
    p = record.position
    values = [p.time, p.latitude, p.longitude, p.height, p.roll, p.pitch, p.heading]
    a = record.accuracy
    values += [None] * 3 if a is None else [a.north, a.east, a.down]
    return ','.join(_fmt(v) for v in values)


def summarize(records: Iterable[Record]) -> dict:
    """Count records and accuracy coverage in one pass."""
    count = 0
    with_accuracy = 0
    first = last = None
    for record in records:
        if first is None:
            first = record.time
        last = record.time
        count += 1
        if record.accuracy is not None:
            with_accuracy += 1
    return {
        'records': count,
        'time_start': first,
        'time_end': last,
        'with_accuracy': with_accuracy,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Decode a GNSS/IMU trajectory file into navigation records',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
    # Print every record of an SBET file
    trajectory-read sbet_mission.out

    # Riegl POF with an explicit POQ file, first 10 records
    trajectory-read flight.pof --accuracy flight.poq --limit 10

    # Summary of an ASCII POS file, options from YAML
    trajectory-read flight.pos --config reader.yaml --summary

    # POS export whose first line is an uncommented column header
    trajectory-read flight.pos --header-lines 1
'''
    )

    parser.add_argument(
        'trajectory',
        type=str,
        nargs='?',
        default=None,
        help='Trajectory file (SBET, POF or POS); default: from config'
    )

    parser.add_argument(
        '--accuracy', '-a',
        type=str,
        default=None,
        help='Accuracy file (POQ or SMRMSG); found next to the trajectory when omitted'
    )

    parser.add_argument(
        '--format', '-f',
        dest='file_format',
        choices=FILE_FORMATS,
        default=None,
        help='Trajectory format (default: from config, else detected from extension)'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='Path to YAML configuration file'
    )

    parser.add_argument(
        '--header-lines',
        type=int,
        default=None,
        help='Leading lines of a POS file to skip, e.g. 1 for an uncommented '
             'column header (default: from config, else 0)'
    )

    parser.add_argument(
        '--limit', '-n',
        type=int,
        default=None,
        help='Stop after N records'
    )

    parser.add_argument(
        '--summary', '-s',
        action='store_true',
        help='Print a summary instead of the records'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = ReaderConfig.from_yaml(args.config) if args.config else ReaderConfig()
        file_format = args.file_format or config.file_format
        trajectory = args.trajectory or config.trajectory
        if args.header_lines is not None:
            config.pos.header_lines = args.header_lines
        if not trajectory:
            raise ValueError('No trajectory file given')

        records = read_trajectory(
            trajectory,
            accuracy_path=args.accuracy or config.accuracy,
            file_format=file_format,
            config=config,
        )
        try:
            selected = itertools.islice(records, args.limit) if args.limit is not None else records
            if args.summary:
                summary = summarize(selected)
                print(f"Records:          {summary['records']}")
                if summary['records']:
                    print(f"Time range:       {summary['time_start']:.3f} to {summary['time_end']:.3f}")
                    coverage = summary['with_accuracy'] / summary['records']
                    print(f"With accuracy:    {summary['with_accuracy']} ({coverage:.1%})")
            else:
                print(','.join(COLUMNS))
                for record in selected:
                    print(format_record(record))
        finally:
            close = getattr(records, 'close', None)
            if callable(close):
                close()
        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except TrajectoryError as e:
        logger.error(f"Decode error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python3
import argparse
import datetime
import os
import sys

import appdirs

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from polar_resolution.cache import Cache  # noqa: E402
from polar_resolution.coordinates import Coordinates  # noqa: E402
from polar_resolution.resolution import ENGLISH_NAMES, PolarCircleResolution, resolve  # noqa: E402
from polar_resolution.schedule import DaylightSchedule  # noqa: E402
from polar_resolution.storage import LocalFileStorage  # noqa: E402
from polar_resolution.utils import say  # noqa: E402
from polar_resolution.visualizer import DaylightVisualizer  # noqa: E402

STRATEGIES = sorted({s.value for s in PolarCircleResolution} | set(ENGLISH_NAMES))


def parse_date(s):
    try:
        return datetime.date.fromisoformat(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f'not a YYYY-MM-DD date: {s!r}')


def main():
    parser = argparse.ArgumentParser(
        description='Resolve sunrise/sunset near and beyond the polar circles')
    parser.add_argument(
        '--lat',
        help='Latitude in decimal degrees (positive = north)',
        type=float,
        required=True,
    )
    parser.add_argument(
        '--lon',
        help='Longitude in decimal degrees (positive = east)',
        type=float,
        required=True,
    )
    parser.add_argument(
        '-s', '--strategy',
        help='Polar circle resolution strategy (default: Unresolved)',
        choices=STRATEGIES,
        default=PolarCircleResolution.UNRESOLVED.value,
    )
    parser.add_argument(
        '-D', '--date',
        help='Print the resolution for a single date (YYYY-MM-DD)',
        type=parse_date,
    )
    parser.add_argument(
        '-y', '--year',
        help='Year for the daylight table/chart (default: current year)',
        type=int,
        default=datetime.date.today().year,
    )
    parser.add_argument(
        '-t', '--table',
        help='Print the daily sunrise/sunset table for the year to stdout',
        action='store_true',
    )
    parser.add_argument(
        '-c', '--chart',
        help='Generate PNG chart to <lat>_<lon>-<year>.png',
        action='store_true',
    )
    parser.add_argument(
        '-d', '--directory',
        help='Directory for output files (default: current directory)',
        type=str,
        default='.',
    )
    args = parser.parse_args()

    if args.date is None and not args.table and not args.chart:
        parser.error('At least one output option required: -D/--date, -t/--table or -c/--chart')

    coordinates = Coordinates(args.lat, args.lon)

    if args.date is not None:
        try:
            outcome = resolve(args.strategy, args.date, coordinates)
        except ValueError as e:
            parser.error(str(e))
        print(DaylightVisualizer.format_outcome(outcome))

    if not args.table and not args.chart:
        return

    cache = Cache(LocalFileStorage(appdirs.user_cache_dir("polar_resolution")))
    schedule = DaylightSchedule(coordinates, args.strategy, cache).get(args.year)

    if args.table:
        print(DaylightVisualizer.format_table(schedule))

    if args.chart:
        output_filename = f'{args.lat:g}_{args.lon:g}-{args.year}.png'
        output_path = os.path.join(args.directory, output_filename)
        say(f'Writing chart to {output_path}')
        png_bytes = DaylightVisualizer.generate_png(schedule)
        with open(output_path, 'wb') as f:
            f.write(png_bytes)


if __name__ == '__main__':
    main()

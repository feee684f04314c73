"""
Polar circle resolution.

Near or beyond the polar circles the sun may not rise or set on a given date,
which leaves sunrise/sunset undefined. The resolvers here look for a nearby
date or a latitude closer to the equator where both are defined, so that
sunrise/sunset-dependent computation always has a pair to work from.
"""
import datetime
import math
from enum import Enum
from typing import NamedTuple, Optional

from polar_resolution.coordinates import Coordinates
from polar_resolution.solar_time import SolarTime
from polar_resolution.utils import add_days

LATITUDE_VARIATION_STEP = 0.5  # Degrees to move toward the equator at each step
UNSAFE_LATITUDE = 65  # Approximate start of midnight sun / polar night
MAX_DAYS_ADDED = math.ceil(365 / 2)


class PolarCircleResolution(str, Enum):
    AQRAB_BALAD = 'AqrabBalad'
    AQRAB_YAUM = 'AqrabYaum'
    UNRESOLVED = 'Unresolved'

    # English aliases
    NEAREST_LATITUDE = 'AqrabBalad'
    NEAREST_DAY = 'AqrabYaum'

    @classmethod
    def _missing_(cls, value):
        # Lookup by English name, e.g. 'NearestDay'
        if isinstance(value, str):
            return ENGLISH_NAMES.get(value)
        return None


ENGLISH_NAMES = {
    'NearestLatitude': PolarCircleResolution.AQRAB_BALAD,
    'NearestDay': PolarCircleResolution.AQRAB_YAUM,
}


class ResolutionOutcome(NamedTuple):
    date: datetime.date
    tomorrow: datetime.date
    coordinates: Coordinates
    solar_time: SolarTime
    tomorrow_solar_time: SolarTime


def is_valid_solar_time(solar_time) -> bool:
    """True if both sunrise and sunset are defined."""
    return not math.isnan(solar_time.sunrise) and not math.isnan(solar_time.sunset)


def _sign(x):
    return (x > 0) - (x < 0)


def aqrab_yaum_resolver(coordinates: Coordinates, date_time: datetime.datetime,
                        days_added: int = 1, direction: int = 1,
                        solar_time=SolarTime) -> Optional[ResolutionOutcome]:
    """Search neighbouring days for defined sunrise/sunset.

    Candidate days are visited at +1, -1, +2, -2, ... days from ``date_time``
    until the offset exceeds MAX_DAYS_ADDED. The "tomorrow" sample is always
    one day after ``date_time`` and the outcome's ``date`` is ``date_time``
    itself; only the first solar time comes from the candidate day.

    Args:
        coordinates: Location, held fixed during the search
        date_time: Anchor date-time (noon of the requested day)
        days_added: Offset to start from
        direction: +1 or -1, direction of the first candidate
        solar_time: Provider called as ``solar_time(date, coordinates)``

    Returns:
        ResolutionOutcome, or None if no candidate within the bound works
    """
    tomorrow = add_days(date_time, 1)

    while days_added <= MAX_DAYS_ADDED:
        try:
            test_date = add_days(date_time, direction * days_added)
        except OverflowError:
            # Before 0001-01-01 or after 9999-12-31: never a valid candidate
            test_date = None

        if test_date is not None:
            test_solar_time = solar_time(test_date.date(), coordinates)
            tomorrow_solar_time = solar_time(tomorrow.date(), coordinates)

            if is_valid_solar_time(test_solar_time) and is_valid_solar_time(tomorrow_solar_time):
                return ResolutionOutcome(date_time, tomorrow, coordinates,
                                         test_solar_time, tomorrow_solar_time)

        # +n is followed by -n, -n by +(n+1)
        if direction < 0:
            days_added += 1
        direction = -direction

    return None


def aqrab_balad_resolver(coordinates: Coordinates, date: datetime.date, latitude: float,
                         solar_time=SolarTime) -> Optional[ResolutionOutcome]:
    """Step the latitude toward the equator until sunrise/sunset are defined.

    Each failed candidate at or beyond UNSAFE_LATITUDE is followed by another
    one LATITUDE_VARIATION_STEP closer to the equator. A failed candidate
    already inside the unsafe latitude ends the search.

    Args:
        coordinates: Original location; its longitude is kept
        date: Date to resolve, held fixed during the search
        latitude: First candidate latitude
        solar_time: Provider called as ``solar_time(date, coordinates)``

    Returns:
        ResolutionOutcome at the first working latitude, or None
    """
    tomorrow = add_days(date, 1)

    while True:
        candidate = coordinates.with_latitude(latitude)
        today_solar_time = solar_time(date, candidate)
        tomorrow_solar_time = solar_time(tomorrow, candidate)

        if is_valid_solar_time(today_solar_time) and is_valid_solar_time(tomorrow_solar_time):
            return ResolutionOutcome(date, tomorrow, candidate,
                                     today_solar_time, tomorrow_solar_time)

        if abs(latitude) < UNSAFE_LATITUDE:
            return None

        latitude = latitude - _sign(latitude) * LATITUDE_VARIATION_STEP


def _as_strategy(strategy) -> Optional[PolarCircleResolution]:
    try:
        return PolarCircleResolution(strategy)
    except ValueError:
        return None


def resolve(strategy, date: datetime.date, coordinates: Coordinates,
            solar_time=SolarTime) -> ResolutionOutcome:
    """Sunrise/sunset context for a date, resolved according to ``strategy``.

    The unresolved outcome (the requested date and location, whatever the
    provider returns for them) is always computed. It is returned as-is when
    both of its solar times are already valid, and whenever the strategy is
    Unresolved, unrecognized, or finds nothing. Callers must check the solar
    times for NaN themselves.

    Args:
        strategy: PolarCircleResolution member, its string value, or
            an English name ("NearestDay", "NearestLatitude")
        date: Requested calendar date
        coordinates: Requested location
        solar_time: Provider called as ``solar_time(date, coordinates)``

    Returns:
        ResolutionOutcome

    Raises:
        ValueError: date is 9999-12-31, whose following day cannot be represented
    """
    try:
        tomorrow = add_days(date, 1)
    except OverflowError:
        raise ValueError(f"No day after {date.isoformat()}: "
                         "cannot resolve the last representable date") from None

    default = ResolutionOutcome(
        date,
        tomorrow,
        coordinates,
        solar_time(date, coordinates),
        solar_time(tomorrow, coordinates),
    )

    # Nothing to resolve
    if is_valid_solar_time(default.solar_time) and is_valid_solar_time(default.tomorrow_solar_time):
        return default

    strategy = _as_strategy(strategy)

    if strategy is PolarCircleResolution.AQRAB_YAUM:
        date_time = datetime.datetime(date.year, date.month, date.day, 12, 0)
        return aqrab_yaum_resolver(coordinates, date_time, solar_time=solar_time) or default

    if strategy is PolarCircleResolution.AQRAB_BALAD:
        latitude = coordinates.latitude
        first = latitude - _sign(latitude) * LATITUDE_VARIATION_STEP
        return aqrab_balad_resolver(coordinates, date, first, solar_time=solar_time) or default

    return default


polar_circle_resolved_values = resolve

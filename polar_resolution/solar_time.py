"""Sunrise/sunset provider for a single date and location, backed by astral."""

import datetime

from astral import Observer
from astral.sun import noon, sunrise, sunset

from polar_resolution.coordinates import Coordinates


def _as_date(d):
    if isinstance(d, datetime.datetime):
        return d.date()
    return d


class SolarTime:
    """Sunrise, sunset and solar transit for one calendar date.

    All three are fractional hours since midnight UTC of the requested date.
    astral picks the event that falls on that UTC date, so far from the prime
    meridian sunset can come out earlier than sunrise. ``sunrise`` and
    ``sunset`` are NaN when the event does not happen that day (polar day or
    polar night).

    Args:
        date: Calendar date (a datetime is truncated to its date)
        coordinates: Location to compute for
    """

    def __init__(self, date, coordinates: Coordinates):
        self.date = _as_date(date)
        self.coordinates = coordinates

        observer = Observer(latitude=coordinates.latitude, longitude=coordinates.longitude)
        midnight = datetime.datetime(self.date.year, self.date.month, self.date.day,
                                     tzinfo=datetime.timezone.utc)

        self.transit = self._event_hours(noon, observer, midnight)
        self.sunrise = self._event_hours(sunrise, observer, midnight)
        self.sunset = self._event_hours(sunset, observer, midnight)

    def _event_hours(self, event, observer, midnight) -> float:
        try:
            when = event(observer, date=self.date, tzinfo=datetime.timezone.utc)
        except ValueError:
            # astral raises ValueError for polar day/night
            return float('nan')
        return (when - midnight).total_seconds() / 3600

    def __repr__(self):
        return (f'SolarTime(date={self.date.isoformat()}, '
                f'lat={self.coordinates.latitude}, lon={self.coordinates.longitude}, '
                f'sunrise={self.sunrise:.4f}, sunset={self.sunset:.4f})')

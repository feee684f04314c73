import io

import pandas as pd

from polar_resolution.cache import Cache, schedule_key
from polar_resolution.coordinates import Coordinates
from polar_resolution.resolution import PolarCircleResolution, is_valid_solar_time, resolve
from polar_resolution.solar_time import SolarTime
from polar_resolution.utils import say


class DaylightSchedule:
    """Resolved sunrise/sunset for every day of a year at one location.

    Runs the polar circle resolution for each date and keeps, per day, the
    sunrise and sunset that downstream computation would use, the latitude
    they were computed at, and whether resolution had to move the date or the
    latitude. Finished years are stored as parquet through the cache.
    """

    COLUMNS = ['sunrise', 'sunset', 'latitude', 'adjusted', 'valid']

    def __init__(self, coordinates: Coordinates, strategy, cache: Cache, solar_time=SolarTime):
        self.coordinates = coordinates
        self.strategy = PolarCircleResolution(strategy)
        self.cache = cache
        self.solar_time = solar_time

    def _compute_year(self, year: int) -> pd.DataFrame:
        """Run the resolution for each day of the year (internal helper).

        Args:
            year: Calendar year

        Returns:
            DataFrame indexed by date with columns sunrise, sunset, latitude,
            adjusted, valid
        """
        say(f'Computing {year} daylight schedule for '
            f'{self.coordinates.latitude}, {self.coordinates.longitude} ({self.strategy.value})')

        days = pd.date_range(f'{year}-01-01', f'{year}-12-31', freq='D')
        rows = []
        for day in days:
            date = day.date()
            outcome = resolve(self.strategy, date, self.coordinates, solar_time=self.solar_time)
            solar = outcome.solar_time
            rows.append({
                'sunrise': solar.sunrise,
                'sunset': solar.sunset,
                'latitude': outcome.coordinates.latitude,
                # A different sample day or latitude means resolution stepped in
                'adjusted': (solar.date != date
                             or outcome.coordinates.latitude != self.coordinates.latitude),
                'valid': is_valid_solar_time(solar),
            })

        df = pd.DataFrame(rows, index=days, columns=self.COLUMNS)
        df.index = df.index.rename('date')

        unresolved = int((~df['valid']).sum())
        if unresolved:
            say(f'{unresolved} days in {year} have no sunrise/sunset after resolution')

        return df

    def get(self, year: int) -> pd.DataFrame:
        """Get the daylight schedule for a year, computing it if not cached.

        Args:
            year: Calendar year

        Returns:
            DataFrame indexed by date; attrs carry latitude, longitude,
            strategy and year
        """

        def compute_and_serialize() -> bytes:
            buffer = io.BytesIO()
            self._compute_year(year).to_parquet(buffer)
            return buffer.getvalue()

        parquet_bytes = self.cache.get(schedule_key(self.coordinates, self.strategy, year),
                                       compute_and_serialize)
        df = pd.read_parquet(io.BytesIO(parquet_bytes))

        df.attrs['latitude'] = self.coordinates.latitude
        df.attrs['longitude'] = self.coordinates.longitude
        df.attrs['strategy'] = self.strategy.value
        df.attrs['year'] = year

        return df

import datetime
import math

from polar_resolution.coordinates import Coordinates
from polar_resolution.solar_time import SolarTime

LONDON = Coordinates(51.47, -0.46)
TROMSO = Coordinates(69.65, 18.96)
MCMURDO = Coordinates(-77.85, 166.67)


class TestSolarTime:

    def test_london_summer(self):
        """London in June: sunrise ~3:45 UTC, sunset ~20:20 UTC."""
        solar = SolarTime(datetime.date(2024, 6, 21), LONDON)
        assert 3.0 < solar.sunrise < 4.5
        assert 19.5 < solar.sunset < 21.0
        assert 11.5 < solar.transit < 12.5

    def test_london_winter(self):
        """London in December: sunrise ~8:05 UTC, sunset ~15:55 UTC."""
        solar = SolarTime(datetime.date(2024, 12, 21), LONDON)
        assert 7.5 < solar.sunrise < 8.5
        assert 15.5 < solar.sunset < 16.5

    def test_polar_day(self):
        """Tromsø at midsummer: midnight sun, no sunrise or sunset."""
        solar = SolarTime(datetime.date(2024, 6, 21), TROMSO)
        assert math.isnan(solar.sunrise)
        assert math.isnan(solar.sunset)
        assert not math.isnan(solar.transit)

    def test_polar_night(self):
        """Tromsø at midwinter: the sun stays below the horizon."""
        solar = SolarTime(datetime.date(2024, 12, 21), TROMSO)
        assert math.isnan(solar.sunrise)
        assert math.isnan(solar.sunset)

    def test_southern_polar_day(self):
        solar = SolarTime(datetime.date(2024, 12, 21), MCMURDO)
        assert math.isnan(solar.sunrise)
        assert math.isnan(solar.sunset)

    def test_datetime_is_truncated(self):
        solar = SolarTime(datetime.datetime(2024, 6, 21, 12, 0), LONDON)
        assert solar.date == datetime.date(2024, 6, 21)
        assert solar.coordinates == LONDON

    def test_return_types(self):
        solar = SolarTime(datetime.date(2024, 3, 20), LONDON)
        assert isinstance(solar.sunrise, float)
        assert isinstance(solar.sunset, float)
        assert solar.sunrise < solar.sunset

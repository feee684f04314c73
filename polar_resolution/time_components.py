"""Split fractional hours (as produced by SolarTime) into clock components."""
import datetime
import math


class TimeComponents:
    """Hours, minutes and seconds of a fractional-hour value.

    Values outside 0-24 are kept as-is in ``hours``; the datetime builders
    roll them over into the previous or next day.
    """

    def __init__(self, num: float):
        if math.isnan(num):
            raise ValueError("Cannot split NaN into time components")

        self.hours = math.floor(num)
        self.minutes = math.floor((num - self.hours) * 60)
        self.seconds = math.floor((num - (self.hours + self.minutes / 60)) * 60 * 60)

    def _offset(self) -> datetime.timedelta:
        return datetime.timedelta(hours=self.hours, minutes=self.minutes, seconds=self.seconds)

    def utc_datetime(self, year: int, month: int, day: int) -> datetime.datetime:
        """Aware UTC datetime for these components on the given day."""
        midnight = datetime.datetime(year, month, day, tzinfo=datetime.timezone.utc)
        return midnight + self._offset()

    def date_time(self, date: datetime.date) -> datetime.datetime:
        """Naive datetime for these components on the given date."""
        midnight = datetime.datetime(date.year, date.month, date.day)
        return midnight + self._offset()

    def __str__(self):
        # Clock reading, so wrap into 0-23
        return f'{self.hours % 24:02d}:{self.minutes:02d}'

    def __repr__(self):
        return f'TimeComponents(hours={self.hours}, minutes={self.minutes}, seconds={self.seconds})'

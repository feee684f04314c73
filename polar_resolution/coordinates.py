"""Geographic coordinate value object."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """Immutable latitude/longitude pair in signed decimal degrees.

    Ranges are not enforced here; callers that accept user input validate
    before constructing.
    """
    latitude: float
    longitude: float

    def with_latitude(self, latitude: float) -> 'Coordinates':
        """Return a copy at another latitude, keeping the longitude."""
        return Coordinates(latitude, self.longitude)

    def to_dict(self) -> dict:
        return {'latitude': self.latitude, 'longitude': self.longitude}

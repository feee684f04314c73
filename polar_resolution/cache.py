"""
Cache-aside layer over a Storage backend.

Whole-year schedules are the expensive unit (hundreds of solar computations,
thousands when a resolver searches), so they are computed once per key and
reused from storage afterwards. Keys come from ``schedule_key``.
"""
from typing import Callable

from polar_resolution.coordinates import Coordinates
from polar_resolution.storage import Storage

KEY_PRECISION = 4  # Decimal places of lat/lon in a key (about 11 m)


def schedule_key(coordinates: Coordinates, strategy, year: int) -> str:
    """
    Storage key of one resolved year.

    Coordinates are rounded to KEY_PRECISION decimals, so locations closer
    than that share a schedule. -0.0 is written as 0.0000.

    Args:
        coordinates: Requested location
        strategy: PolarCircleResolution member; its value names the strategy
        year: Calendar year

    Returns:
        Key such as "69.6500_18.9600_AqrabBalad_2024.parquet"
    """
    lat = round(coordinates.latitude, KEY_PRECISION) + 0.0
    lon = round(coordinates.longitude, KEY_PRECISION) + 0.0
    return f"{lat:.{KEY_PRECISION}f}_{lon:.{KEY_PRECISION}f}_{strategy.value}_{year}.parquet"


class Cache:
    """
    Cache-aside over a storage backend.

    Args:
        storage: Where computed schedules are kept
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def get(self, filename: str, retriever: Callable[[], bytes]) -> bytes:
        """
        Return the bytes stored under filename, computing and storing them on a miss.

        An empty byte string is a valid cached value; only None is a miss.

        Args:
            filename: Storage key
            retriever: Called with no arguments on a miss; must return bytes

        Returns:
            Stored or freshly computed bytes

        Raises:
            TypeError: retriever returned something other than bytes
        """
        data = self.storage.get(filename)
        if data is not None:
            return data

        data = retriever()
        if not isinstance(data, bytes):
            raise TypeError(f"Retriever for {filename} returned {type(data).__name__}, expected bytes")
        self.storage.put(filename, data)
        return data


class NoOpCache(Cache):
    """Always recomputes."""

    class _NullStorage(Storage):
        def get(self, filename: str):
            return None

        def put(self, filename: str, data: bytes):
            pass

    def __init__(self):
        super().__init__(self._NullStorage())

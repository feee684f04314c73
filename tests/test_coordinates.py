import dataclasses

import pytest

from polar_resolution.coordinates import Coordinates


class TestCoordinates:

    def test_with_latitude_keeps_longitude(self):
        base = Coordinates(69.65, 18.96)
        moved = base.with_latitude(65.0)
        assert moved == Coordinates(65.0, 18.96)
        assert base == Coordinates(69.65, 18.96)

    def test_immutable(self):
        coords = Coordinates(69.65, 18.96)
        with pytest.raises(dataclasses.FrozenInstanceError):
            coords.latitude = 0.0

    def test_hashable(self):
        assert len({Coordinates(1.0, 2.0), Coordinates(1.0, 2.0)}) == 1

    def test_range_not_enforced(self):
        assert Coordinates(95.0, 200.0).latitude == 95.0

    def test_to_dict(self):
        assert Coordinates(-77.85, 166.67).to_dict() == {'latitude': -77.85, 'longitude': 166.67}

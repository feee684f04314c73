from polar_resolution.coordinates import Coordinates
from polar_resolution.resolution import (
    PolarCircleResolution,
    ResolutionOutcome,
    is_valid_solar_time,
    polar_circle_resolved_values,
    resolve,
)
from polar_resolution.solar_time import SolarTime
from polar_resolution.time_components import TimeComponents

__all__ = [
    'Coordinates',
    'PolarCircleResolution',
    'ResolutionOutcome',
    'SolarTime',
    'TimeComponents',
    'is_valid_solar_time',
    'polar_circle_resolved_values',
    'resolve',
]

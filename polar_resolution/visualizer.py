import math

import pandas as pd
import plotly.express as px

from polar_resolution.resolution import ResolutionOutcome, is_valid_solar_time
from polar_resolution.time_components import TimeComponents


def _clock(hours):
    """HH:MM for fractional hours, None for NaN."""
    if hours is None or math.isnan(hours):
        return None
    return str(TimeComponents(hours))


def _number(value):
    """JSON-safe float (NaN becomes None)."""
    if value is None or math.isnan(value):
        return None
    return float(value)


class DaylightVisualizer:
    COLORS = {
        'sunrise': 'orange',
        'sunset': 'purple',
    }

    @staticmethod
    def _title(df: pd.DataFrame) -> str:
        return (f"{df.attrs.get('latitude')}, {df.attrs.get('longitude')} "
                f"({df.attrs.get('strategy', 'Unresolved')}), {df.attrs.get('year', '')}")

    @staticmethod
    def generate_png(schedule_df: pd.DataFrame) -> bytes:
        fig = px.line(
            schedule_df[['sunrise', 'sunset']],
            width=800,
            height=400,
            color_discrete_map=DaylightVisualizer.COLORS,
        )
        fig.update_layout(
            yaxis={'range': [0, 24], 'dtick': 3},
            yaxis_title='UTC hour',
            xaxis_title='Date',
            title=DaylightVisualizer._title(schedule_df),
        )
        return fig.to_image(format='png')

    @staticmethod
    def format_table(schedule_df: pd.DataFrame) -> str:
        lines = []
        lines.append(f"\n{DaylightVisualizer._title(schedule_df)}")
        lines.append(f"{'Date':<10} {'Rise':>5} {'Set':>5} {'Lat':>7}")
        lines.append("-" * 32)

        for day, row in schedule_df.iterrows():
            sunrise = _clock(row['sunrise']) or '--'
            sunset = _clock(row['sunset']) or '--'
            mark = ' *' if row['adjusted'] else ''
            lines.append(f"{day:%Y-%m-%d} {sunrise:>5} {sunset:>5} {row['latitude']:7.2f}{mark}")
        return '\n'.join(lines)

    @staticmethod
    def format_outcome(outcome: ResolutionOutcome) -> str:
        lines = []
        for label, solar in (('Date', outcome.solar_time), ('Tomorrow', outcome.tomorrow_solar_time)):
            lines.append(f"{label:<9} {solar.date.isoformat()}  "
                         f"sunrise {_clock(solar.sunrise) or '--':>5}  "
                         f"sunset {_clock(solar.sunset) or '--':>5}")
        lines.append(f"{'Location':<9} {outcome.coordinates.latitude}, {outcome.coordinates.longitude}")
        if not (is_valid_solar_time(outcome.solar_time)
                and is_valid_solar_time(outcome.tomorrow_solar_time)):
            lines.append("Unresolved: no sunrise/sunset")
        return '\n'.join(lines)

    @staticmethod
    def outcome_to_dict(outcome: ResolutionOutcome) -> dict:
        def solar_dict(solar):
            return {
                'date': solar.date.isoformat(),
                'sunrise': _number(solar.sunrise),
                'sunset': _number(solar.sunset),
                'sunrise_hhmm': _clock(solar.sunrise),
                'sunset_hhmm': _clock(solar.sunset),
            }

        return {
            'date': outcome.date.isoformat(),
            'tomorrow': outcome.tomorrow.isoformat(),
            'coordinates': outcome.coordinates.to_dict(),
            'solar_time': solar_dict(outcome.solar_time),
            'tomorrow_solar_time': solar_dict(outcome.tomorrow_solar_time),
            'valid': (is_valid_solar_time(outcome.solar_time)
                      and is_valid_solar_time(outcome.tomorrow_solar_time)),
        }

    @staticmethod
    def to_dict(schedule_df: pd.DataFrame) -> dict:
        days = {}
        for day, row in schedule_df.iterrows():
            days[f'{day:%Y-%m-%d}'] = {
                'sunrise': _number(row['sunrise']),
                'sunset': _number(row['sunset']),
                'sunrise_hhmm': _clock(row['sunrise']),
                'sunset_hhmm': _clock(row['sunset']),
                'latitude': float(row['latitude']),
                'adjusted': bool(row['adjusted']),
                'valid': bool(row['valid']),
            }

        return {
            'latitude': schedule_df.attrs.get('latitude'),
            'longitude': schedule_df.attrs.get('longitude'),
            'strategy': schedule_df.attrs.get('strategy'),
            'year': schedule_df.attrs.get('year'),
            'days': days,
        }

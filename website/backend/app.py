import datetime
import os
import sys
import traceback

import appdirs
import cherrypy

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../..'))

from polar_resolution.cache import Cache  # noqa: E402
from polar_resolution.coordinates import Coordinates  # noqa: E402
from polar_resolution.resolution import PolarCircleResolution, polar_circle_resolved_values  # noqa: E402
from polar_resolution.schedule import DaylightSchedule  # noqa: E402
from polar_resolution.storage import LocalFileStorage, S3Storage  # noqa: E402
from polar_resolution.utils import say  # noqa: E402
from polar_resolution.visualizer import DaylightVisualizer  # noqa: E402

# Host configuration
PRODUCTION_FRONTEND = 'https://polar.example.org'
DEV_FRONTEND = 'http://localhost:4000'


def parse_coordinates(lat, lon):
    latitude = float(lat)
    longitude = float(lon)
    if not (-90 <= latitude <= 90):
        raise ValueError("Latitude must be between -90 and 90")
    if not (-180 <= longitude <= 180):
        raise ValueError("Longitude must be between -180 and 180")
    return Coordinates(latitude, longitude)


def make_storage():
    """S3 when POLAR_CACHE_BUCKET is set, otherwise the local user cache dir."""
    bucket = os.environ.get('POLAR_CACHE_BUCKET')
    if bucket:
        return S3Storage(bucket, prefix=os.environ.get('POLAR_CACHE_PREFIX', ''))
    return LocalFileStorage(appdirs.user_cache_dir("polar_resolution"))


class PolarAPI:
    def __init__(self, dev_mode=False):
        self.dev_mode = dev_mode
        self.frontend_origin = DEV_FRONTEND if dev_mode else PRODUCTION_FRONTEND

    def _error(self, what, e):
        say(f'API error for {what}: {type(e).__name__}: {str(e)}')
        traceback.print_exc()
        cherrypy.response.status = 400
        return {'error': str(e)}

    @cherrypy.expose
    @cherrypy.tools.json_out()
    def resolve(self, lat, lon, date, strategy=PolarCircleResolution.UNRESOLVED.value):
        """GET /api/resolve?lat=69.65&lon=18.96&date=2024-06-21&strategy=AqrabBalad"""
        try:
            coordinates = parse_coordinates(lat, lon)
            day = datetime.date.fromisoformat(date)
            outcome = polar_circle_resolved_values(strategy, day, coordinates)
            return DaylightVisualizer.outcome_to_dict(outcome)
        except Exception as e:
            return self._error(f'{lat},{lon} {date}', e)

    @cherrypy.expose
    @cherrypy.tools.json_out()
    def schedule(self, lat, lon, year, strategy=PolarCircleResolution.UNRESOLVED.value):
        """GET /api/schedule?lat=69.65&lon=18.96&year=2024&strategy=AqrabYaum"""
        try:
            coordinates = parse_coordinates(lat, lon)
            year = int(year)
            if not (1 <= year <= 9998):
                raise ValueError("Year must be between 1 and 9998")

            cache = Cache(make_storage())
            df = DaylightSchedule(coordinates, strategy, cache).get(year)
            return DaylightVisualizer.to_dict(df)
        except Exception as e:
            return self._error(f'{lat},{lon} {year}', e)

    @cherrypy.expose
    @cherrypy.tools.json_out()
    def health(self):
        """GET /api/health"""
        return {'status': 'ok'}


def create_app(dev_mode=False):
    """Create and configure the CherryPy application"""
    api = PolarAPI(dev_mode=dev_mode)

    conf = {
        '/': {
            'tools.response_headers.on': True,
            'tools.response_headers.headers': [
                ('Access-Control-Allow-Origin', api.frontend_origin),
                ('Access-Control-Allow-Methods', 'GET, OPTIONS'),
                ('Access-Control-Allow-Headers', 'Content-Type'),
            ],
        }
    }

    return api, conf


# "application" is the magic function called by uwsgi
def application(environ, start_response):
    api, conf = create_app(dev_mode=False)
    cherrypy.tree.mount(api, '/', conf)
    cherrypy.config.update({
        'log.screen': True,
        'environment': 'production',
        'tools.proxy.on': True,
    })
    return cherrypy.tree(environ, start_response)


if __name__ == '__main__':
    # Running directly - use development mode
    api, conf = create_app(dev_mode=True)

    cherrypy.tree.mount(api, '/api', conf)
    cherrypy.config.update({
        'server.socket_host': '0.0.0.0',
        'server.socket_port': 5000,
    })

    say("Starting polar resolution API server in DEVELOPMENT mode")

    cherrypy.engine.start()
    cherrypy.engine.block()

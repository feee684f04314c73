import json
import os
import sys
import tempfile

import boto3
from moto import mock_aws
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import cherrypy  # noqa: E402
from cherrypy.test import helper  # noqa: E402

from polar_resolution.storage import LocalFileStorage, S3Storage  # noqa: E402
from website.backend.app import PolarAPI, create_app, make_storage, parse_coordinates  # noqa: E402


class TestPolarAPI(helper.CPWebCase):
    @staticmethod
    def setup_server():
        api, conf = create_app(dev_mode=True)
        cherrypy.tree.mount(api, '/api', conf)

    def test_resolve_endpoint_valid_location(self):
        self.getPage('/api/resolve?lat=51.47&lon=-0.46&date=2024-06-21')

        self.assertStatus('200 OK')
        self.assertHeader('Content-Type', 'application/json')

        response_data = json.loads(self.body.decode('utf-8'))
        assert response_data['valid'] is True
        assert response_data['date'] == '2024-06-21'
        assert response_data['coordinates'] == {'latitude': 51.47, 'longitude': -0.46}
        assert response_data['solar_time']['sunrise'] < response_data['solar_time']['sunset']

    def test_resolve_endpoint_polar_unresolved(self):
        self.getPage('/api/resolve?lat=69.65&lon=18.96&date=2024-06-21')

        self.assertStatus('200 OK')
        response_data = json.loads(self.body.decode('utf-8'))
        assert response_data['valid'] is False
        assert response_data['solar_time']['sunrise'] is None

    def test_resolve_endpoint_nearest_latitude(self):
        self.getPage('/api/resolve?lat=69.65&lon=18.96&date=2024-06-21&strategy=AqrabBalad')

        self.assertStatus('200 OK')
        response_data = json.loads(self.body.decode('utf-8'))
        assert response_data['valid'] is True
        assert response_data['coordinates']['latitude'] < 69.65
        assert response_data['coordinates']['longitude'] == 18.96

    def test_resolve_endpoint_english_strategy_name(self):
        self.getPage('/api/resolve?lat=69.65&lon=18.96&date=2024-06-21&strategy=NearestLatitude')

        self.assertStatus('200 OK')
        response_data = json.loads(self.body.decode('utf-8'))
        assert response_data['valid'] is True
        assert response_data['coordinates']['latitude'] < 69.65

    def test_resolve_endpoint_unknown_strategy_falls_back(self):
        self.getPage('/api/resolve?lat=69.65&lon=18.96&date=2024-06-21&strategy=Bogus')

        self.assertStatus('200 OK')
        response_data = json.loads(self.body.decode('utf-8'))
        assert response_data['valid'] is False
        assert response_data['coordinates']['latitude'] == 69.65

    def test_resolve_endpoint_invalid_latitude(self):
        self.getPage('/api/resolve?lat=91&lon=0&date=2024-06-21')

        self.assertStatus('400 Bad Request')
        response_data = json.loads(self.body.decode('utf-8'))
        assert 'Latitude' in response_data['error']

    def test_resolve_endpoint_invalid_date(self):
        self.getPage('/api/resolve?lat=51.47&lon=-0.46&date=June')

        self.assertStatus('400 Bad Request')
        response_data = json.loads(self.body.decode('utf-8'))
        assert 'error' in response_data

    def test_resolve_endpoint_last_representable_date(self):
        self.getPage('/api/resolve?lat=51.47&lon=-0.46&date=9999-12-31')

        self.assertStatus('400 Bad Request')
        response_data = json.loads(self.body.decode('utf-8'))
        assert '9999-12-31' in response_data['error']

    def test_resolve_endpoint_missing_params(self):
        self.getPage('/api/resolve?lat=51.47&lon=-0.46')

        assert self.status != '200 OK'

    @patch.dict(os.environ, {}, clear=False)
    @patch('appdirs.user_cache_dir')
    def test_schedule_endpoint(self, mock_cache_dir):
        os.environ.pop('POLAR_CACHE_BUCKET', None)

        with tempfile.TemporaryDirectory() as tmpdir:
            mock_cache_dir.return_value = tmpdir

            self.getPage('/api/schedule?lat=51.47&lon=-0.46&year=2024')

            self.assertStatus('200 OK')
            response_data = json.loads(self.body.decode('utf-8'))
            assert response_data['year'] == 2024
            assert response_data['strategy'] == 'Unresolved'
            assert len(response_data['days']) == 366
            assert response_data['days']['2024-06-21']['valid'] is True
            assert os.listdir(tmpdir) == ['51.4700_-0.4600_Unresolved_2024.parquet']

    def test_schedule_endpoint_invalid_strategy(self):
        self.getPage('/api/schedule?lat=51.47&lon=-0.46&year=2024&strategy=Bogus')

        self.assertStatus('400 Bad Request')

    def test_schedule_endpoint_invalid_year(self):
        self.getPage('/api/schedule?lat=51.47&lon=-0.46&year=abc')

        self.assertStatus('400 Bad Request')

    def test_health_endpoint(self):
        self.getPage('/api/health')

        self.assertStatus('200 OK')
        self.assertHeader('Content-Type', 'application/json')

        response_data = json.loads(self.body.decode('utf-8'))
        assert response_data['status'] == 'ok'

    def test_cors_headers_dev_mode(self):
        self.getPage('/api/health')

        self.assertStatus('200 OK')
        self.assertHeader('Access-Control-Allow-Origin', 'http://localhost:4000')


class TestCreateApp:
    def test_create_app_dev_mode(self):
        api, conf = create_app(dev_mode=True)

        assert isinstance(api, PolarAPI)
        assert api.dev_mode is True
        assert api.frontend_origin == 'http://localhost:4000'
        assert 'tools.response_headers.headers' in conf['/']

    def test_create_app_production_mode(self):
        api, conf = create_app(dev_mode=False)

        assert api.dev_mode is False
        assert api.frontend_origin == 'https://polar.example.org'

    def test_cors_configuration(self):
        api, conf = create_app(dev_mode=True)

        headers = dict(conf['/']['tools.response_headers.headers'])
        assert headers['Access-Control-Allow-Origin'] == 'http://localhost:4000'
        assert headers['Access-Control-Allow-Methods'] == 'GET, OPTIONS'


class TestHelpers:
    def test_parse_coordinates(self):
        coords = parse_coordinates('69.65', '-18.96')
        assert coords.latitude == 69.65
        assert coords.longitude == -18.96

    def test_parse_coordinates_rejects_longitude(self):
        try:
            parse_coordinates('0', '181')
        except ValueError as e:
            assert 'Longitude' in str(e)
        else:
            raise AssertionError('expected ValueError')

    @patch('appdirs.user_cache_dir')
    def test_make_storage_local(self, mock_cache_dir):
        with tempfile.TemporaryDirectory() as tmpdir:
            mock_cache_dir.return_value = tmpdir
            with patch.dict(os.environ, {'POLAR_CACHE_BUCKET': ''}):
                storage = make_storage()
            assert isinstance(storage, LocalFileStorage)
            assert storage.base_dir == tmpdir

    def test_make_storage_s3(self):
        env = {
            'POLAR_CACHE_BUCKET': 'polar-cache',
            'POLAR_CACHE_PREFIX': 'schedules',
            'AWS_DEFAULT_REGION': 'us-east-1',
        }
        with mock_aws(), patch.dict(os.environ, env):
            boto3.client('s3', region_name='us-east-1').create_bucket(Bucket='polar-cache')
            storage = make_storage()
            assert isinstance(storage, S3Storage)
            assert storage.bucket_name == 'polar-cache'
            assert storage.prefix == 'schedules/'

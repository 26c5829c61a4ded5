"""
Health check API unit tests
"""

import shutil
from unittest.mock import patch

from services import catalog_service
from utils.errors import StorageUnavailableError


class TestHealthEndpoint:
    """Health check endpoint tests"""

    def test_healthy_service(self, client):
        """Database reachable and upload folder present"""
        response = client.get('/health')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'ok'
        assert data['message']
        assert data['timestamp']
        assert data['database']['connected'] is True
        assert data['database']['dialect'] == 'sqlite'
        assert data['uploads']['directory'] == 'exists'

    def test_health_reports_missing_upload_folder(self, client, upload_dir):
        shutil.rmtree(upload_dir)

        response = client.get('/health')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'degraded'
        assert data['uploads']['directory'] == 'missing'

    def test_health_reports_database_down(self, client):
        with patch.object(catalog_service, 'check_database',
                          side_effect=StorageUnavailableError('Database not connected')):
            response = client.get('/health')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'degraded'
        assert data['database']['connected'] is False

"""
pytest configuration - shared fixtures for the backend and widget tests
"""

import io
import os
import sys
import shutil
import pytest
import tempfile
from pathlib import Path

# Make backend/ and frontend/ importable
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))
sys.path.insert(0, str(backend_path.parent / 'frontend'))

# Must be set before importing app / config
os.environ['TESTING'] = 'true'
os.environ['FLASK_ENV'] = 'testing'


@pytest.fixture(scope='session')
def app():
    """Flask test application on a temporary SQLite database and upload folder"""
    temp_dir = tempfile.mkdtemp()
    temp_db = os.path.join(temp_dir, 'test.db')
    upload_dir = os.path.join(temp_dir, 'uploads')

    os.environ['DATABASE_URL'] = f'sqlite:///{temp_db}'
    os.environ['UPLOAD_FOLDER'] = upload_dir

    from app import create_app
    from config import TestingConfig

    TestingConfig.SQLALCHEMY_DATABASE_URI = f'sqlite:///{temp_db}'
    TestingConfig.UPLOAD_FOLDER = upload_dir

    test_app = create_app(TestingConfig)
    test_app.config.update({
        'TESTING': True,
    })

    yield test_app

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(scope='function')
def client(app):
    """Test client with empty tables and an empty upload folder"""
    with app.test_client() as test_client:
        with app.app_context():
            from models import db
            db.session.rollback()
            for table in reversed(db.metadata.sorted_tables):
                db.session.execute(table.delete())
            db.session.commit()

            upload_dir = Path(app.config['UPLOAD_FOLDER'])
            shutil.rmtree(upload_dir, ignore_errors=True)
            upload_dir.mkdir(parents=True, exist_ok=True)

            yield test_client
            db.session.rollback()


@pytest.fixture
def upload_dir(app):
    return Path(app.config['UPLOAD_FOLDER'])


def make_upload(filename='chair.glb', size=1024, **fields):
    """Multipart form data for POST /api/upload"""
    data = {
        'model': (io.BytesIO(b'g' * size), filename),
        'name': 'Office Chair',
        'category': 'Furniture',
        'description': 'Ergonomic office chair',
        'materials': '',
        'specifications': '',
    }
    data.update(fields)
    return data


@pytest.fixture
def sample_model(client):
    """Upload chair.glb and return the created record"""
    response = client.post('/api/upload', data=make_upload(), content_type='multipart/form-data')
    data = response.get_json()
    return data['model'] if data.get('success') else None


@pytest.fixture
def model_file(tmp_path):
    """A small GLB file on disk for the widget tests"""
    path = tmp_path / 'chair.glb'
    path.write_bytes(b'glTF' + b'\x00' * 4092)
    return path


# =====================================
# Assertion helpers
# =====================================

def assert_success_response(response, status_code=200):
    """Assert a success envelope"""
    assert response.status_code == status_code
    data = response.get_json()
    assert data is not None
    assert data.get('success') is True
    return data


def assert_error_response(response, expected_status=None):
    """Assert an error envelope"""
    if expected_status:
        assert response.status_code == expected_status
    data = response.get_json()
    assert data is not None
    assert data.get('success') is False
    assert isinstance(data.get('error'), str)
    return data

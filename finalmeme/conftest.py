# finalmeme/conftest.py
"""
Shared pytest fixtures.

The application is built with mocked repositories and services, so no
Firebase project is needed to run the suite:

    python -m pytest finalmeme -v
"""

from unittest.mock import MagicMock

import pytest

from finalmeme import create_app
from finalmeme.core.security import create_token


@pytest.fixture
def services():
    return {
        'user_repository': MagicMock(),
        'post_repository': MagicMock(),
        'events': MagicMock(),
        'images': MagicMock(),
        'storage': MagicMock(),
        'posts': MagicMock(),
        'users': MagicMock(),
    }


@pytest.fixture
def app(services):
    return create_app('testing', services=services)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_header(app):
    """Returns a function building a valid bearer header for a user id."""
    def _header(user_id='1', user_name='javi'):
        with app.app_context():
            token = create_token({'id': user_id, 'user_name': user_name, 'avatar': None})
        return {'Authorization': f'Bearer {token}'}
    return _header


@pytest.fixture
def sample_image():
    return {
        'url_original': 'public/uploads/meme-1234.png',
        'url': 'https://storage.example.com/public/uploads/meme-1234_1.webp',
        'mimetype': 'image/webp',
        'size': 2048,
    }

# finalmeme/core/config.py

import os
from datetime import timedelta


class Config:
    """Settings shared by every environment."""
    # Signs and verifies the access tokens handed out at login.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv('JWT_EXPIRES_HOURS', 24)))

    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET')

    # The post feed is served in fixed pages of three.
    POSTS_PAGE_SIZE = 3

    # Uploads are staged here before optimization and the bucket upload.
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join('public', 'uploads'))
    MAX_CONTENT_LENGTH = 8_000_000

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Events older than this are removed by the Firestore TTL policy on 'expire_at'.
    EVENTS_TTL = timedelta(hours=int(os.getenv('EVENTS_TTL_HOURS', 24)))


class DevelopmentConfig(Config):
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('TEST_JWT_SECRET_KEY', 'finalmeme-test-secret-not-for-production')
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')


class ProductionConfig(Config):
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')


# create_app picks the class matching FLASK_ENV.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)

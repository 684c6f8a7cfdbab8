# finalmeme/__init__.py

# =====================================================================================
# 1. Environment (must run before the config classes read os.environ)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Imports
# =====================================================================================
import os
import logging
from typing import Any, Dict, Optional

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials

from finalmeme.core.config import config_by_name
from finalmeme.core.errors import register_error_handlers

from finalmeme.api.posts.routes import posts_bp
from finalmeme.api.users.routes import users_bp

from finalmeme.repositories import PostRepository, UserRepository
from finalmeme.services.event_service import EventPublisher
from finalmeme.services.image_service import ImageService
from finalmeme.services.storage_service import StorageService
from finalmeme.api.posts.services import PostService
from finalmeme.api.users.services import UserService


def _init_firebase(app: Flask):
    if firebase_admin._apps:
        return
    cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
    if not cred_path or not os.path.exists(cred_path):
        raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
    cred = credentials.Certificate(cred_path)
    firebase_admin.initialize_app(cred, {
        'storageBucket': app.config['FIREBASE_STORAGE_BUCKET']
    })


def _build_services(app: Flask) -> Dict[str, Any]:
    services: Dict[str, Any] = {}

    # Shared infrastructure first, domain services get it injected.
    try:
        storage_instance = StorageService()
        storage_instance.init_app(app)
        services['storage'] = storage_instance
        logging.info("Storage service initialized successfully")
    except Exception as e:
        logging.error(f"Failed to initialize storage service: {e}")
        raise

    services['events'] = EventPublisher(ttl=app.config['EVENTS_TTL'])
    services['user_repository'] = UserRepository()
    services['post_repository'] = PostRepository()
    services['images'] = ImageService(
        storage_service=services['storage'],
        upload_folder=app.config['UPLOAD_FOLDER']
    )

    services['posts'] = PostService(
        post_repository=services['post_repository'],
        user_repository=services['user_repository'],
        publisher=services['events'],
        page_size=app.config['POSTS_PAGE_SIZE']
    )
    services['users'] = UserService(user_repository=services['user_repository'])
    return services


def create_app(config_name: Optional[str] = None, services: Optional[Dict[str, Any]] = None):
    """
    Flask application factory.

    :param config_name: key of config_by_name, defaults to FLASK_ENV
    :param services: prebuilt services; when given Firebase is not initialised
    """
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 3. Extensions and external services
    # =====================================================================================
    JWTManager(app)
    CORS(app, origins=app.config['CORS_ORIGINS'])

    if services is None:
        _init_firebase(app)
        services = _build_services(app)
    app.services = services

    # =====================================================================================
    # 4. Blueprints
    # =====================================================================================
    app.register_blueprint(users_bp, url_prefix='/user')
    app.register_blueprint(posts_bp, url_prefix='/post')

    @app.after_request
    def add_security_headers(response):
        response.headers['Content-Security-Policy'] = 'upgrade-insecure-requests;'
        return response

    # =====================================================================================
    # 5. Error handlers and logging
    # =====================================================================================
    register_error_handlers(app)

    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app

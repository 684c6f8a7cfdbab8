import jwt
from dataclasses import dataclass
from functools import wraps
from typing import Any, Dict, Optional

from flask import current_app, g, request
from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash, generate_password_hash

from finalmeme.core.errors import HttpError
from finalmeme.repositories.base import reference_id


@dataclass
class AuthClaim:
    """Identity decoded from a verified bearer token. Lives on `g.auth` for one request."""
    id: str
    user_name: Optional[str] = None
    avatar: Optional[Dict[str, Any]] = None


def hash_password(value: str) -> str:
    return generate_password_hash(value)


def compare_password(value: str, hashed: str) -> bool:
    return check_password_hash(hashed, value)


def create_token(user: Dict[str, Any]) -> str:
    """Issues the access token returned by login. The user id travels as `sub`."""
    return create_access_token(
        identity=user['id'],
        additional_claims={"userName": user.get('user_name'), "avatar": user.get('avatar')}
    )


def verify_token(token: str) -> AuthClaim:
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config.get('JWT_ALGORITHM', 'HS256')]
        )
    except jwt.PyJWTError as e:
        raise HttpError(498, 'Invalid Token', str(e))
    if 'sub' not in payload:
        raise HttpError(498, 'Invalid Token', 'Token has no subject')
    return AuthClaim(id=payload['sub'], user_name=payload.get('userName'), avatar=payload.get('avatar'))


def current_claim() -> Optional[AuthClaim]:
    return g.get('auth')


def logged(f):
    """Requires a valid bearer token and attaches its claim to `g.auth`."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            raise HttpError(401, 'Not authorized', 'Not authorization header')
        if not auth_header.startswith("Bearer"):
            raise HttpError(401, 'Not authorized', 'No Bearer in authorization header')

        token = auth_header[7:]
        g.auth = verify_token(token)
        return f(*args, **kwargs)

    return decorated_function


def authorized(f):
    """
    Ownership gate for post-scoped mutations. Must run after `logged`:
    a missing claim means the decorators were stacked in the wrong order.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        claim = current_claim()
        if claim is None:
            raise HttpError(498, 'Token not found', 'Token not found in authorized interceptor')

        post_repository = current_app.services['post_repository']
        post = post_repository.query_by_id(kwargs['post_id'])
        if reference_id(post.get('owner')) != claim.id:
            raise HttpError(401, 'Not Authorized', 'Not Authorized')
        return f(*args, **kwargs)

    return decorated_function

# finalmeme/api/users/services.py
import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from finalmeme.core.errors import HttpError
from finalmeme.core.security import compare_password, create_token, hash_password
from finalmeme.models.user import User

LOGIN_ERROR_MESSAGE = 'User or password invalid'


class UserService:
    """Registration and credential login."""

    def __init__(self, user_repository):
        self.user_repository = user_repository

    def register(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Stores a new user with its password hashed. userName and email must be unused."""
        if (self.user_repository.search('user_name', data['user_name'])
                or self.user_repository.search('email', data['email'])):
            raise HttpError(406, 'Not Acceptable', 'User name or email already registered')

        user = User(
            user_name=data['user_name'],
            email=data['email'],
            passwd=hash_password(data['passwd']),
            avatar=data['avatar']
        )
        new_user = self.user_repository.create(asdict(user))
        logging.info(f"User registered (user_id: {new_user['id']})")
        return new_user

    def login(self, user: Optional[str], passwd: Optional[str]) -> Dict[str, Any]:
        """
        `user` may be the user name or the email. Every failure answers the
        same 400 so the response never tells which part was wrong.
        """
        if not user or not passwd:
            raise HttpError(400, 'Bad request', LOGIN_ERROR_MESSAGE)

        found = self.user_repository.search('user_name', user)
        if not found:
            found = self.user_repository.search('email', user)
        if not found:
            raise HttpError(400, 'Bad request', LOGIN_ERROR_MESSAGE)

        candidate = found[0]
        if not compare_password(passwd, candidate.get('passwd', '')):
            raise HttpError(400, 'Bad request', LOGIN_ERROR_MESSAGE)

        return {"token": create_token(candidate), "user": candidate}

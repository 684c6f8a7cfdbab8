# finalmeme/api/users/routes.py
from flask import Blueprint, current_app, jsonify, request
from marshmallow import ValidationError

from finalmeme.api import crud
from finalmeme.api.users.schemas import UserRegisterSchema
from finalmeme.core.errors import HttpError
from finalmeme.core.security import logged
from finalmeme.schemas import LoginResponseSchema, UserSchema

users_bp = Blueprint('users_bp', __name__)


@users_bp.route('/', methods=['GET'])
def get_users():
    return crud.list_response(current_app.services['user_repository'], UserSchema())


@users_bp.route('/<string:user_id>', methods=['GET'])
@logged
def get_user(user_id: str):
    return crud.get_response(current_app.services['user_repository'], user_id, UserSchema())


@users_bp.route('/register', methods=['POST'])
def register():
    """
    Multipart form with `userName`, `email`, `passwd` and the `avatar` file.
    Invalid fields answer 406, as a missing or unreadable avatar does.
    """
    user_service = current_app.services['users']
    image_service = current_app.services['images']
    try:
        data = UserRegisterSchema().load(request.form.to_dict())
    except ValidationError as err:
        raise HttpError(406, 'Not Acceptable', f"Invalid registration data: {sorted(err.messages)}")
    data['avatar'] = image_service.save_upload(request.files.get('avatar'), 'register')
    return crud.created_response(user_service.register(data), UserSchema())


@users_bp.route('/login', methods=['PATCH'])
def login():
    user_service = current_app.services['users']
    body = request.get_json(silent=True) or {}
    result = user_service.login(body.get('user'), body.get('passwd'))
    return jsonify(LoginResponseSchema().dump(result)), 200

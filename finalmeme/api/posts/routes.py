# finalmeme/api/posts/routes.py
from flask import Blueprint, current_app, jsonify, request, url_for

from finalmeme.api import crud
from finalmeme.api.posts.schemas import CommentCreateSchema, PostCreateSchema, PostPatchSchema
from finalmeme.core.security import authorized, current_claim, logged
from finalmeme.schemas import PageResponseSchema, PostSchema, UserSchema

posts_bp = Blueprint('posts_bp', __name__)


@posts_bp.route('/', methods=['GET'])
def get_posts():
    """
    Post feed, three posts per page, optionally filtered by flair.
    """
    post_service = current_app.services['posts']
    page = max(request.args.get('page', 1, type=int), 1)
    flair = request.args.get('flair') or None
    base_url = url_for('posts_bp.get_posts', _external=True).rstrip('/')
    result = post_service.get_all(page, flair, base_url)
    return jsonify(PageResponseSchema().dump(result)), 200


@posts_bp.route('/<string:post_id>', methods=['GET'])
def get_post(post_id: str):
    return crud.get_response(current_app.services['post_repository'], post_id, PostSchema())


@posts_bp.route('/', methods=['POST'])
@logged
def create_post():
    """
    Multipart form with `description`, `flair` and the `image` file.
    The owner is always the authenticated caller.
    """
    post_service = current_app.services['posts']
    image_service = current_app.services['images']
    data = PostCreateSchema().load(request.form.to_dict())
    data['image'] = image_service.save_upload(request.files.get('image'), 'post')
    new_post = post_service.create(current_claim(), data)
    return crud.created_response(new_post, PostSchema())


@posts_bp.route('/<string:post_id>', methods=['PATCH'])
@logged
@authorized
def patch_post(post_id: str):
    post_service = current_app.services['posts']
    data = PostPatchSchema().load(request.get_json(silent=True) or {})
    updated_post = post_service.patch(post_id, data)
    return crud.updated_response(updated_post, PostSchema())


@posts_bp.route('/<string:post_id>', methods=['DELETE'])
@logged
@authorized
def delete_post(post_id: str):
    current_app.services['posts'].delete(current_claim(), post_id)
    return crud.deleted_response()


@posts_bp.route('/addfavorite/<string:post_id>', methods=['PATCH'])
@logged
def add_favorite(post_id: str):
    updated_user = current_app.services['posts'].add_favorite(current_claim(), post_id)
    return crud.updated_response(updated_user, UserSchema())


@posts_bp.route('/removefavorite/<string:post_id>', methods=['PATCH'])
@logged
def remove_favorite(post_id: str):
    updated_user = current_app.services['posts'].remove_favorite(current_claim(), post_id)
    return crud.updated_response(updated_user, UserSchema())


@posts_bp.route('/addcomment/<string:post_id>', methods=['PATCH'])
@logged
def add_comment(post_id: str):
    post_service = current_app.services['posts']
    data = CommentCreateSchema().load(request.get_json(silent=True) or {})
    updated_post = post_service.add_comment(current_claim(), post_id, data['comment'])
    return crud.updated_response(updated_post, PostSchema())

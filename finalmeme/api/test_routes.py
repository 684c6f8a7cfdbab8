# finalmeme/api/test_routes.py
import io

import pytest

from finalmeme.api.posts.services import PostService
from finalmeme.core.errors import HttpError


@pytest.fixture
def stored_user(sample_image):
    return {
        'id': 'u1', 'user_name': 'javi', 'email': 'javi@example.com',
        'passwd': 'pbkdf2:sha256$hash', 'avatar': sample_image,
        'created_post': [], 'favorite_post': [],
    }


@pytest.fixture
def stored_post(sample_image, stored_user):
    return {
        'id': 'p1', 'description': 'first meme', 'flair': 'funny',
        'image': sample_image, 'owner': stored_user, 'comments': [],
    }


class TestUserRoutes:

    def test_register_answers_201_without_the_password(self, client, services, stored_user, sample_image):
        services['images'].save_upload.return_value = sample_image
        services['users'].register.return_value = stored_user

        response = client.post('/user/register', data={
            'userName': 'javi', 'email': 'javi@example.com', 'passwd': 'abc12345',
            'avatar': (io.BytesIO(b'fake image bytes'), 'avatar.png'),
        }, content_type='multipart/form-data')

        assert response.status_code == 201
        body = response.get_json()
        assert body['userName'] == 'javi'
        assert body['avatar']['urlOriginal'] == sample_image['url_original']
        assert 'passwd' not in body
        data = services['users'].register.call_args[0][0]
        assert data == {'user_name': 'javi', 'email': 'javi@example.com', 'passwd': 'abc12345',
                        'avatar': sample_image}

    @pytest.mark.parametrize('form', [
        {'userName': 'javi', 'email': 'not-an-email', 'passwd': 'abc12345'},
        {'userName': 'javi', 'email': 'javi@example.com', 'passwd': 'short1'},
        {'userName': 'javi', 'email': 'javi@example.com', 'passwd': 'onlyletters'},
        {'email': 'javi@example.com', 'passwd': 'abc12345'},
    ])
    def test_invalid_registration_is_406(self, client, services, form):
        response = client.post('/user/register', data=form, content_type='multipart/form-data')
        assert response.status_code == 406
        services['users'].register.assert_not_called()
        services['images'].save_upload.assert_not_called()

    def test_login_returns_token_and_user(self, client, services, stored_user):
        services['users'].login.return_value = {'token': 'abc.def.ghi', 'user': stored_user}

        response = client.patch('/user/login', json={'user': 'javi', 'passwd': 'abc12345'})

        assert response.status_code == 200
        body = response.get_json()
        assert body['token'] == 'abc.def.ghi'
        assert body['user']['id'] == 'u1'
        assert 'passwd' not in body['user']
        services['users'].login.assert_called_once_with('javi', 'abc12345')

    def test_failed_login_is_400(self, client, services):
        services['users'].login.side_effect = HttpError(400, 'Bad request', 'User or password invalid')
        response = client.patch('/user/login', json={'user': 'javi', 'passwd': 'nope'})
        assert response.status_code == 400
        assert response.get_json() == {'status': 400}

    def test_list_users(self, client, services, stored_user):
        services['user_repository'].query.return_value = [stored_user]
        services['user_repository'].count.return_value = 1

        response = client.get('/user/')

        assert response.status_code == 200
        body = response.get_json()
        assert body['count'] == 1
        assert body['items'][0]['userName'] == 'javi'
        assert 'passwd' not in body['items'][0]

    def test_get_user_requires_a_token(self, client, services):
        response = client.get('/user/u1')
        assert response.status_code == 401
        services['user_repository'].query_by_id.assert_not_called()

    def test_get_user_expands_posts(self, client, services, stored_user, auth_header):
        services['user_repository'].query_by_id.return_value = {
            **stored_user, 'favorite_post': [{'id': 'p2', 'description': 'fav', 'owner': 'u2'}]
        }
        response = client.get('/user/u1', headers=auth_header('u1'))
        assert response.status_code == 200
        assert response.get_json()['favoritePost'] == [
            {'id': 'p2', 'description': 'fav', 'owner': 'u2'}
        ]


class TestPostRoutes:

    def test_feed_clamps_the_page_and_passes_the_flair(self, client, services, stored_post):
        services['posts'].get_all.return_value = {
            'items': [stored_post], 'count': 1, 'previous': None, 'next': None
        }

        response = client.get('/post/?page=0&flair=funny')

        assert response.status_code == 200
        page, flair, base_url = services['posts'].get_all.call_args[0]
        assert (page, flair) == (1, 'funny')
        assert base_url == 'http://localhost/post'
        body = response.get_json()
        assert body['count'] == 1
        assert body['items'][0]['owner']['userName'] == 'javi'
        assert 'passwd' not in body['items'][0]['owner']

    def test_feed_links_use_the_mount_path(self, client, services, stored_post):
        services['posts'] = PostService(services['post_repository'], services['user_repository'], services['events'])
        services['post_repository'].query.return_value = [stored_post]
        services['post_repository'].count.return_value = 10

        response = client.get('/post/?page=2&flair=funny')

        body = response.get_json()
        assert body['previous'] == 'http://localhost/post?flair=funny&page=1'
        assert body['next'] == 'http://localhost/post?flair=funny&page=3'

    def test_get_post_unknown_is_404(self, client, services):
        services['post_repository'].query_by_id.side_effect = HttpError(404, 'Not found', 'Bad id for the query')
        assert client.get('/post/missing').status_code == 404

    def test_create_post_owned_by_the_caller(self, client, services, sample_image, stored_post, auth_header):
        services['images'].save_upload.return_value = sample_image
        services['posts'].create.return_value = {**stored_post, 'owner': 'u1'}

        response = client.post('/post/', data={
            'description': 'first meme', 'flair': 'funny', 'owner': 'someone-else',
            'image': (io.BytesIO(b'fake image bytes'), 'meme.png'),
        }, content_type='multipart/form-data', headers=auth_header('u1'))

        assert response.status_code == 201
        assert response.get_json()['owner'] == 'u1'
        claim, data = services['posts'].create.call_args[0]
        assert claim.id == 'u1'
        assert 'owner' not in data
        assert data['image'] == sample_image
        assert services['images'].save_upload.call_args[0][1] == 'post'

    def test_create_post_without_token_is_401(self, client, services):
        response = client.post('/post/', data={'description': 'x', 'flair': 'funny'},
                               content_type='multipart/form-data')
        assert response.status_code == 401
        services['posts'].create.assert_not_called()

    def test_create_post_missing_flair_is_400(self, client, services, auth_header):
        response = client.post('/post/', data={'description': 'x'},
                               content_type='multipart/form-data', headers=auth_header('u1'))
        assert response.status_code == 400
        services['posts'].create.assert_not_called()

    def test_owner_can_patch(self, client, services, stored_post, auth_header):
        services['post_repository'].query_by_id.return_value = stored_post
        services['posts'].patch.return_value = {**stored_post, 'description': 'edited'}

        response = client.patch('/post/p1', json={'description': 'edited'}, headers=auth_header('u1'))

        assert response.status_code == 200
        assert response.get_json()['description'] == 'edited'
        services['posts'].patch.assert_called_once_with('p1', {'description': 'edited'})

    def test_non_owner_delete_is_401(self, client, services, stored_post, auth_header):
        services['post_repository'].query_by_id.return_value = stored_post

        response = client.delete('/post/p1', headers=auth_header('u2'))

        assert response.status_code == 401
        services['posts'].delete.assert_not_called()

    def test_owner_delete_is_204(self, client, services, stored_post, auth_header):
        services['post_repository'].query_by_id.return_value = stored_post

        response = client.delete('/post/p1', headers=auth_header('u1'))

        assert response.status_code == 204
        assert response.data == b''
        claim, post_id = services['posts'].delete.call_args[0]
        assert (claim.id, post_id) == ('u1', 'p1')

    def test_add_favorite_returns_the_user(self, client, services, stored_user, auth_header):
        services['posts'].add_favorite.return_value = {**stored_user, 'favorite_post': ['p1']}

        response = client.patch('/post/addfavorite/p1', headers=auth_header('u1'))

        assert response.status_code == 200
        assert response.get_json()['favoritePost'] == ['p1']

    def test_remove_favorite_returns_the_user(self, client, services, stored_user, auth_header):
        services['posts'].remove_favorite.return_value = stored_user
        response = client.patch('/post/removefavorite/p1', headers=auth_header('u1'))
        assert response.status_code == 200
        assert response.get_json()['favoritePost'] == []

    def test_add_comment(self, client, services, stored_post, stored_user, auth_header):
        services['posts'].add_comment.return_value = {
            **stored_post, 'comments': [{'comment': 'lol', 'owner': stored_user}]
        }

        response = client.patch('/post/addcomment/p1', json={'comment': 'lol'}, headers=auth_header('u1'))

        assert response.status_code == 200
        assert response.get_json()['comments'][0]['owner']['userName'] == 'javi'
        assert services['posts'].add_comment.call_args[0][1:] == ('p1', 'lol')

    def test_empty_comment_is_400(self, client, services, auth_header):
        response = client.patch('/post/addcomment/p1', json={}, headers=auth_header('u1'))
        assert response.status_code == 400
        services['posts'].add_comment.assert_not_called()


def test_responses_carry_the_security_header(client, services):
    services['user_repository'].query.return_value = []
    services['user_repository'].count.return_value = 0
    response = client.get('/user/')
    assert response.headers['Content-Security-Policy'] == 'upgrade-insecure-requests;'

# finalmeme/schemas/test_schemas.py
from finalmeme.schemas import LoginResponseSchema, PageResponseSchema, PostSchema, UserSchema


def _user(**overrides):
    user = {
        'id': 'u1', 'user_name': 'javi', 'email': 'javi@example.com',
        'passwd': 'pbkdf2:sha256$hash', 'avatar': None,
        'created_post': ['p1'], 'favorite_post': [],
    }
    user.update(overrides)
    return user


def test_user_is_dumped_in_camel_case_without_password():
    body = UserSchema().dump(_user())
    assert body['userName'] == 'javi'
    assert body['createdPost'] == ['p1']
    assert body['favoritePost'] == []
    assert 'passwd' not in body


def test_expanded_relationships_are_nested_and_still_hide_passwords():
    post = {'id': 'p1', 'description': 'd', 'flair': 'funny', 'owner': _user(created_post=[])}
    body = UserSchema().dump(_user(created_post=[post]))
    assert body['createdPost'][0]['owner']['userName'] == 'javi'
    assert 'passwd' not in body['createdPost'][0]['owner']


def test_post_owner_may_be_an_id_or_a_user():
    assert PostSchema().dump({'id': 'p1', 'owner': 'u1'})['owner'] == 'u1'
    assert PostSchema().dump({'id': 'p1', 'owner': _user()})['owner']['id'] == 'u1'


def test_comment_owner_is_expanded():
    body = PostSchema().dump({'id': 'p1', 'comments': [{'comment': 'lol', 'owner': _user()}]})
    assert body['comments'][0] == {'comment': 'lol', 'owner': UserSchema().dump(_user())}


def test_page_envelope_keeps_null_links():
    body = PageResponseSchema().dump({'items': [], 'count': 0, 'previous': None, 'next': None})
    assert body == {'items': [], 'count': 0, 'previous': None, 'next': None}


def test_login_response_hides_the_hash():
    body = LoginResponseSchema().dump({'token': 't', 'user': _user()})
    assert body['token'] == 't'
    assert 'passwd' not in body['user']

import pytest
from rest_framework.test import APIClient

PASSWORD = 'Sintra-sunset-42'


@pytest.fixture
def anon():
    return APIClient()


def register(client, email='nina@example.com'):
    return client.post('/api/v1/auth/register/', {
        'firstName': 'Nina',
        'lastName': 'Costa',
        'email': email,
        'password': PASSWORD,
    }, format='json')


@pytest.mark.django_db
def test_register_returns_tokens(anon):
    response = register(anon, email='Nina@Example.com')
    assert response.status_code == 201
    assert response.data['user']['email'] == 'nina@example.com'
    assert response.data['user']['name'] == 'Nina Costa'
    assert response.data['accessToken']
    assert response.data['refreshToken']


@pytest.mark.django_db
def test_register_duplicate_email(anon):
    register(anon)
    response = register(anon)
    assert response.status_code == 400
    assert 'email' in response.data['error']['details']


@pytest.mark.django_db
def test_login_and_use_access_token(anon):
    register(anon)

    response = anon.post('/api/v1/auth/login/', {'email': 'nina@example.com', 'password': PASSWORD}, format='json')
    assert response.status_code == 200

    anon.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['accessToken']}")
    profile = anon.get('/api/v1/users/me/')
    assert profile.status_code == 200
    assert profile.data['data']['firstName'] == 'Nina'


@pytest.mark.django_db
def test_login_with_wrong_password(anon):
    register(anon)
    response = anon.post('/api/v1/auth/login/', {'email': 'nina@example.com', 'password': 'nope'}, format='json')
    assert response.status_code == 401
    assert response.data['error']['code'] == 'authentication_failed'


@pytest.mark.django_db
def test_refresh_token(anon):
    refresh = register(anon).data['refreshToken']
    response = anon.post('/api/v1/auth/token/refresh/', {'refresh': refresh}, format='json')
    assert response.status_code == 200
    assert 'access' in response.data


def test_update_profile(client, alice):
    response = client.patch('/api/v1/users/me/', {'lastName': 'Silva'}, format='json')
    assert response.status_code == 200
    assert response.data['data']['name'] == 'Alice Silva'
    alice.refresh_from_db()
    assert alice.last_name == 'Silva'

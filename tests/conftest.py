import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.groups.models import Group, GroupMember
from apps.trips.models import Trip

User = get_user_model()


def make_user(first_name, email=None):
    email = email or f'{first_name.lower()}@example.com'
    return User.objects.create_user(
        username=first_name.lower(),
        email=email,
        password='testpass123',
        first_name=first_name,
    )


@pytest.fixture
def alice(db):
    return make_user('Alice')


@pytest.fixture
def bob(db):
    return make_user('Bob')


@pytest.fixture
def charlie(db):
    return make_user('Charlie')


@pytest.fixture
def dave(db):
    return make_user('Dave')


@pytest.fixture
def outsider(db):
    return make_user('Olivia')


@pytest.fixture
def group(alice, bob, charlie, dave):
    """Alice owns the group; Bob and Charlie are members, Dave a viewer."""
    group = Group.objects.create(name='Road Trip Crew', created_by=alice)
    GroupMember.objects.create(group=group, user=alice, role=GroupMember.Role.OWNER)
    GroupMember.objects.create(group=group, user=bob, role=GroupMember.Role.MEMBER)
    GroupMember.objects.create(group=group, user=charlie, role=GroupMember.Role.MEMBER)
    GroupMember.objects.create(group=group, user=dave, role=GroupMember.Role.VIEWER)
    return group


@pytest.fixture
def trip(group, alice):
    return Trip.objects.create(group=group, name='Lisbon', created_by=alice)


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def client(client_for, alice):
    return client_for(alice)

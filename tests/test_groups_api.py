import pytest

from apps.groups.models import Group, GroupMember
from apps.groups.permissions import can_modify_member_role, can_remove_member, has_role_at_least

Role = GroupMember.Role


def members_url(group, member=None):
    url = f'/api/v1/groups/{group.id}/members/'
    return f'{url}{member.id}/' if member else url


def membership(group, user):
    return GroupMember.objects.get(group=group, user=user)


@pytest.mark.parametrize('role, minimum, expected', [
    (Role.OWNER, Role.ADMIN, True),
    (Role.ADMIN, Role.ADMIN, True),
    (Role.MEMBER, Role.ADMIN, False),
    (Role.MEMBER, Role.MEMBER, True),
    (Role.VIEWER, Role.MEMBER, False),
    (Role.VIEWER, Role.VIEWER, True),
    ('UNKNOWN', Role.VIEWER, False),
])
def test_role_hierarchy(role, minimum, expected):
    assert has_role_at_least(role, minimum) is expected


def test_creator_becomes_owner(client, alice):
    response = client.post('/api/v1/groups/', {'name': 'Ski Weekend'}, format='json')
    assert response.status_code == 201

    group = Group.objects.get(id=response.data['data']['id'])
    assert membership(group, alice).role == Role.OWNER
    assert response.data['data']['memberCount'] == 1


def test_list_only_my_groups(client_for, outsider, group):
    assert client_for(outsider).get('/api/v1/groups/').data['data'] == []


def test_member_list(client_for, dave, group):
    response = client_for(dave).get(members_url(group))
    assert response.status_code == 200
    assert len(response.data['data']) == 4


def test_outsider_cannot_list_members(client_for, outsider, group):
    assert client_for(outsider).get(members_url(group)).status_code == 403


def test_owner_adds_member_by_email(client, group, outsider):
    response = client.post(members_url(group), {'email': 'olivia@example.com', 'role': 'VIEWER'}, format='json')
    assert response.status_code == 201
    assert membership(group, outsider).role == Role.VIEWER


def test_adding_existing_member_is_rejected(client, group):
    response = client.post(members_url(group), {'email': 'bob@example.com'}, format='json')
    assert response.status_code == 400


def test_member_cannot_add_members(client_for, bob, group, outsider):
    response = client_for(bob).post(members_url(group), {'email': 'olivia@example.com'}, format='json')
    assert response.status_code == 403


def test_owner_changes_role(client, group, bob):
    member = membership(group, bob)
    response = client.patch(members_url(group, member), {'role': 'ADMIN'}, format='json')
    assert response.status_code == 200
    member.refresh_from_db()
    assert member.role == Role.ADMIN


def test_owner_role_is_protected(client_for, bob, group, alice):
    GroupMember.objects.filter(group=group, user=bob).update(role=Role.ADMIN)
    owner = membership(group, alice)

    response = client_for(bob).patch(members_url(group, owner), {'role': 'MEMBER'}, format='json')
    assert response.status_code == 400
    assert response.data['error']['code'] == 'owner_required'

    response = client_for(bob).delete(members_url(group, owner))
    assert response.status_code == 400


def test_leave_group(client_for, charlie, group):
    response = client_for(charlie).delete(f'/api/v1/groups/{group.id}/leave/')
    assert response.status_code == 200
    assert not GroupMember.objects.filter(group=group, user=charlie).exists()


def test_owner_cannot_leave(client, group):
    response = client.delete(f'/api/v1/groups/{group.id}/leave/')
    assert response.status_code == 400


@pytest.mark.parametrize('current, target, new, expected', [
    (Role.OWNER, Role.ADMIN, Role.MEMBER, True),
    (Role.OWNER, Role.MEMBER, Role.ADMIN, True),
    (Role.OWNER, Role.MEMBER, Role.OWNER, False),
    (Role.ADMIN, Role.MEMBER, Role.VIEWER, True),
    (Role.ADMIN, Role.ADMIN, Role.VIEWER, False),
    (Role.ADMIN, Role.MEMBER, Role.ADMIN, False),
    (Role.MEMBER, Role.VIEWER, Role.MEMBER, False),
])
def test_can_modify_member_role(current, target, new, expected):
    assert can_modify_member_role(current, target, new) is expected


@pytest.mark.parametrize('current, same_user, target, expected', [
    (Role.OWNER, False, Role.ADMIN, True),
    (Role.ADMIN, False, Role.MEMBER, True),
    (Role.ADMIN, False, Role.VIEWER, True),
    (Role.ADMIN, False, Role.ADMIN, False),
    (Role.ADMIN, True, Role.ADMIN, True),
    (Role.MEMBER, False, Role.VIEWER, False),
    (Role.OWNER, False, Role.OWNER, False),
])
def test_can_remove_member(current, same_user, target, expected):
    target_id = 'u1' if same_user else 'u2'
    assert can_remove_member(current, 'u1', target_id, target) is expected


@pytest.fixture
def two_admins(group, bob, charlie):
    GroupMember.objects.filter(group=group, user__in=[bob, charlie]).update(role=Role.ADMIN)
    return group


def test_admin_cannot_demote_another_admin(client_for, bob, charlie, two_admins):
    target = membership(two_admins, charlie)
    response = client_for(bob).patch(members_url(two_admins, target), {'role': 'VIEWER'}, format='json')
    assert response.status_code == 403
    target.refresh_from_db()
    assert target.role == Role.ADMIN


def test_admin_cannot_remove_another_admin(client_for, bob, charlie, two_admins):
    target = membership(two_admins, charlie)
    response = client_for(bob).delete(members_url(two_admins, target))
    assert response.status_code == 403
    assert GroupMember.objects.filter(pk=target.pk).exists()


def test_admin_cannot_grant_admin(client_for, bob, dave, two_admins):
    target = membership(two_admins, dave)
    response = client_for(bob).patch(members_url(two_admins, target), {'role': 'ADMIN'}, format='json')
    assert response.status_code == 403


def test_admin_manages_members_and_viewers(client_for, bob, dave, two_admins):
    target = membership(two_admins, dave)
    response = client_for(bob).patch(members_url(two_admins, target), {'role': 'MEMBER'}, format='json')
    assert response.status_code == 200

    response = client_for(bob).delete(members_url(two_admins, target))
    assert response.status_code == 200
    assert not GroupMember.objects.filter(pk=target.pk).exists()

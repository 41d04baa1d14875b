"""
Role hierarchy and permissions for the Groups app.
"""
from rest_framework.permissions import BasePermission

from apps.groups.models import GroupMember

Role = GroupMember.Role

ROLE_HIERARCHY = {
    Role.VIEWER: 1,
    Role.MEMBER: 2,
    Role.ADMIN: 3,
    Role.OWNER: 4,
}


def has_role_at_least(role, minimum):
    """Return True if *role* ranks at or above *minimum*."""
    return ROLE_HIERARCHY.get(role, 0) >= ROLE_HIERARCHY[minimum]


def can_modify_member_role(current_role, target_role, new_role):
    """
    OWNER may change any non-owner role; ADMIN only MEMBER and VIEWER rows,
    and may not grant ADMIN. Nobody can make or unmake an OWNER.
    """
    if Role.OWNER in (target_role, new_role):
        return False
    if current_role == Role.OWNER:
        return True
    if current_role == Role.ADMIN:
        return Role.ADMIN not in (target_role, new_role)
    return False


def can_remove_member(current_role, current_user_id, target_user_id, target_role):
    """
    The owner cannot be removed. Anyone may remove themselves; OWNER may
    remove anyone else and ADMIN only MEMBER and VIEWER rows.
    """
    if target_role == Role.OWNER:
        return False
    if current_user_id == target_user_id:
        return True
    if current_role == Role.OWNER:
        return True
    if current_role == Role.ADMIN:
        return target_role in (Role.MEMBER, Role.VIEWER)
    return False


def get_membership(group_id, user):
    """Return the user's ``GroupMember`` row for *group_id*, or None."""
    return GroupMember.objects.filter(group_id=group_id, user=user).first()


def _group_id_for(obj):
    # obj can be a Group or anything with a ``group_id``
    return getattr(obj, 'group_id', None) or obj.pk


class IsGroupAdmin(BasePermission):
    """
    Allows access only to group admins and owners.
    Checks the group from the object or from URL kwargs.
    """
    message = 'You must be a group admin to perform this action.'

    def has_object_permission(self, request, view, obj):
        membership = get_membership(_group_id_for(obj), request.user)
        return membership is not None and has_role_at_least(membership.role, Role.ADMIN)

    def has_permission(self, request, view):
        group_pk = view.kwargs.get('group_pk')
        if group_pk is None:
            return True  # Let object permission handle it

        membership = get_membership(group_pk, request.user)
        return membership is not None and has_role_at_least(membership.role, Role.ADMIN)


class IsGroupMember(BasePermission):
    """
    Allows access only to group members (any role).
    """
    message = 'You must be a group member to perform this action.'

    def has_object_permission(self, request, view, obj):
        return GroupMember.objects.filter(
            group_id=_group_id_for(obj),
            user=request.user,
        ).exists()

    def has_permission(self, request, view):
        group_pk = view.kwargs.get('group_pk')
        if group_pk is None:
            return True

        return GroupMember.objects.filter(
            group_id=group_pk,
            user=request.user,
        ).exists()

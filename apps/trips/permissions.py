"""
Custom permissions for the Trips app.
"""
from rest_framework.permissions import SAFE_METHODS, BasePermission

from apps.groups.models import GroupMember
from apps.groups.permissions import get_membership, has_role_at_least


class IsTripGroupMember(BasePermission):
    """
    Allows read access to any member of the trip's group; changes need
    MEMBER or higher, deletion ADMIN or higher.
    """
    message = 'You do not have permission to perform this action on this trip.'

    def has_object_permission(self, request, view, obj):
        membership = get_membership(obj.group_id, request.user)
        if membership is None:
            return False
        if request.method in SAFE_METHODS:
            return True
        if request.method == 'DELETE':
            return has_role_at_least(membership.role, GroupMember.Role.ADMIN)
        return has_role_at_least(membership.role, GroupMember.Role.MEMBER)

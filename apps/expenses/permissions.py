"""
Custom permissions for the Expenses app.
"""
from rest_framework.permissions import SAFE_METHODS, BasePermission

from apps.groups.models import GroupMember
from apps.groups.permissions import get_membership, has_role_at_least

Role = GroupMember.Role


def can_create_expense(role):
    """MEMBER or higher may record expenses."""
    return has_role_at_least(role, Role.MEMBER)


def can_modify_expense(role, is_payer):
    """ADMIN or higher may edit any expense; the payer may edit their own."""
    return has_role_at_least(role, Role.ADMIN) or is_payer


def can_delete_expense(role, is_payer):
    """ADMIN or higher may delete any expense; the payer may delete their own."""
    return has_role_at_least(role, Role.ADMIN) or is_payer


class IsExpenseGroupMember(BasePermission):
    """
    Members of the trip's group may read an expense; writes follow the
    role hierarchy.
    """
    message = 'You do not have permission to modify this expense.'

    def has_object_permission(self, request, view, obj):
        membership = get_membership(obj.trip.group_id, request.user)
        if membership is None:
            return False
        if request.method in SAFE_METHODS:
            return True

        is_payer = obj.paid_by_id == request.user.id
        if request.method == 'DELETE':
            return can_delete_expense(membership.role, is_payer)
        return can_modify_expense(membership.role, is_payer)

"""
Views for the Groups app.
"""
import logging

from rest_framework import generics, status, viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.groups.models import Group, GroupMember
from apps.groups.permissions import (
    IsGroupAdmin,
    IsGroupMember,
    can_modify_member_role,
    can_remove_member,
    get_membership,
)
from apps.groups.serializers import (
    AddMemberSerializer,
    GroupCreateSerializer,
    GroupMemberSerializer,
    GroupSerializer,
    GroupUpdateSerializer,
    MemberRoleSerializer,
)

logger = logging.getLogger(__name__)


def _owner_error(message):
    return Response(
        {
            'success': False,
            'error': {
                'code': 'owner_required',
                'message': message,
            },
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class GroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Group CRUD operations.

    list:   GET    /api/v1/groups/
    create: POST   /api/v1/groups/
    read:   GET    /api/v1/groups/{id}/
    update: PATCH  /api/v1/groups/{id}/
    delete: DELETE /api/v1/groups/{id}/
    """
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Group.objects.filter(
            members__user=self.request.user,
            is_active=True,
        ).prefetch_related('members__user').distinct()

    def get_serializer_class(self):
        if self.action == 'create':
            return GroupCreateSerializer
        if self.action in ('update', 'partial_update'):
            return GroupUpdateSerializer
        return GroupSerializer

    def get_permissions(self):
        if self.action in ('update', 'partial_update', 'destroy'):
            return [IsAuthenticated(), IsGroupAdmin()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        group = serializer.save()
        logger.info('Group %s created by %s', group.id, request.user.id)
        return Response(
            {
                'success': True,
                'data': GroupSerializer(group).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = GroupSerializer(instance)
        return Response({'success': True, 'data': serializer.data})

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = GroupSerializer(queryset, many=True)
        return Response({'success': True, 'data': serializer.data})

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = GroupUpdateSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({'success': True, 'data': GroupSerializer(instance).data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])
        return Response(
            {'success': True, 'message': 'Group deactivated.'},
            status=status.HTTP_200_OK,
        )


class GroupMemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing group members.

    list:    GET    /api/v1/groups/{group_id}/members/
    create:  POST   /api/v1/groups/{group_id}/members/
    update:  PATCH  /api/v1/groups/{group_id}/members/{id}/
    destroy: DELETE /api/v1/groups/{group_id}/members/{id}/
    """
    serializer_class = GroupMemberSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return GroupMember.objects.filter(
            group_id=self.kwargs['group_pk'],
        ).select_related('user')

    def get_permissions(self):
        if self.action in ('create', 'update', 'partial_update', 'destroy'):
            return [IsAuthenticated(), IsGroupAdmin()]
        return [IsAuthenticated(), IsGroupMember()]

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'success': True, 'data': serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = AddMemberSerializer(
            data=request.data,
            context={'group_id': self.kwargs['group_pk'], 'request': request},
        )
        serializer.is_valid(raise_exception=True)
        member = serializer.save()
        return Response(
            {'success': True, 'data': GroupMemberSerializer(member).data},
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, *args, **kwargs):
        member = self.get_object()
        if member.role == GroupMember.Role.OWNER:
            return _owner_error('The group owner role cannot be changed.')

        serializer = MemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_role = serializer.validated_data['role']
        current = get_membership(member.group_id, request.user)
        if not can_modify_member_role(current.role, member.role, new_role):
            raise PermissionDenied("You cannot change this member's role.")

        logger.info('Member %s role %s -> %s by %s', member.user_id, member.role, new_role, request.user.id)
        member.role = new_role
        member.save(update_fields=['role', 'updated_at'])
        return Response({'success': True, 'data': GroupMemberSerializer(member).data})

    def destroy(self, request, *args, **kwargs):
        member = self.get_object()
        if member.role == GroupMember.Role.OWNER:
            return _owner_error('The group owner cannot be removed.')

        current = get_membership(member.group_id, request.user)
        if not can_remove_member(current.role, request.user.id, member.user_id, member.role):
            raise PermissionDenied('You cannot remove this member.')

        member.delete()
        return Response(
            {'success': True, 'message': 'Member removed.'},
            status=status.HTTP_200_OK,
        )


class LeaveGroupView(generics.DestroyAPIView):
    """
    Leave a group.

    DELETE /api/v1/groups/{group_id}/leave/
    """
    permission_classes = [IsAuthenticated]

    def delete(self, request, group_pk=None, *args, **kwargs):
        try:
            membership = GroupMember.objects.get(
                group_id=group_pk,
                user=request.user,
            )
        except GroupMember.DoesNotExist:
            return Response(
                {
                    'success': False,
                    'error': {
                        'code': 'not_member',
                        'message': 'You are not a member of this group.',
                    },
                },
                status=status.HTTP_404_NOT_FOUND,
            )

        if membership.role == GroupMember.Role.OWNER:
            return _owner_error('The group owner cannot leave the group.')

        membership.delete()
        return Response(
            {'success': True, 'message': 'Successfully left the group.'},
            status=status.HTTP_200_OK,
        )

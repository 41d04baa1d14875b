"""
Serializers for the Groups app.
All output uses camelCase to match the web client.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.groups.models import Group, GroupMember

User = get_user_model()


class GroupMemberSerializer(serializers.ModelSerializer):
    userId = serializers.CharField(source='user.id', read_only=True)
    groupId = serializers.CharField(source='group_id', read_only=True)
    userName = serializers.CharField(source='user.display_name', read_only=True)
    userAvatar = serializers.SerializerMethodField()
    joinedAt = serializers.DateTimeField(source='joined_at', read_only=True)

    class Meta:
        model = GroupMember
        fields = ['id', 'userId', 'groupId', 'role', 'userName', 'userAvatar', 'joinedAt']
        read_only_fields = fields

    def get_userAvatar(self, obj):
        url = getattr(obj.user, 'avatar', None) or ''
        return url.strip() or None


class GroupSerializer(serializers.ModelSerializer):
    createdBy = serializers.CharField(source='created_by_id', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    memberCount = serializers.ReadOnlyField(source='member_count')
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Group
        fields = ['id', 'name', 'description', 'createdBy', 'isActive', 'memberCount', 'createdAt']
        read_only_fields = fields


class GroupCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Group
        fields = ['name', 'description']

    def create(self, validated_data):
        user = self.context['request'].user
        validated_data['created_by'] = user
        group = Group.objects.create(**validated_data)
        GroupMember.objects.create(group=group, user=user, role=GroupMember.Role.OWNER)
        return group


class GroupUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Group
        fields = ['name', 'description']


class AddMemberSerializer(serializers.Serializer):
    email = serializers.EmailField()
    role = serializers.ChoiceField(
        choices=[GroupMember.Role.ADMIN, GroupMember.Role.MEMBER, GroupMember.Role.VIEWER],
        default=GroupMember.Role.MEMBER,
    )

    def validate_email(self, value):
        try:
            user = User.objects.get(email=value.lower())
        except User.DoesNotExist:
            raise serializers.ValidationError('No user with this email exists.')

        group_id = self.context['group_id']
        if GroupMember.objects.filter(group_id=group_id, user=user).exists():
            raise serializers.ValidationError('This user is already a member of the group.')

        self.user = user
        return value

    def create(self, validated_data):
        return GroupMember.objects.create(
            group_id=self.context['group_id'],
            user=self.user,
            role=validated_data['role'],
        )


class MemberRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(
        choices=[GroupMember.Role.ADMIN, GroupMember.Role.MEMBER, GroupMember.Role.VIEWER],
    )

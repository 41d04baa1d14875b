"""
Serializers for the Trips app.
All output uses camelCase to match the web client.
"""
from rest_framework import serializers

from apps.groups.models import GroupMember
from apps.groups.permissions import has_role_at_least
from apps.trips.models import Trip


class TripSerializer(serializers.ModelSerializer):
    groupId = serializers.CharField(source='group_id', read_only=True)
    startDate = serializers.DateField(source='start_date', read_only=True)
    endDate = serializers.DateField(source='end_date', read_only=True)
    createdBy = serializers.CharField(source='created_by_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Trip
        fields = [
            'id', 'groupId', 'name', 'description', 'destination',
            'startDate', 'endDate', 'status', 'createdBy', 'createdAt',
        ]
        read_only_fields = fields


class TripCreateSerializer(serializers.Serializer):
    """Accepts camelCase input, maps to snake_case model fields."""
    groupId = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    destination = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    startDate = serializers.DateField(required=False, allow_null=True)
    endDate = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):
        start_date = attrs.get('startDate')
        end_date = attrs.get('endDate')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({'endDate': 'End date must be after start date.'})

        user = self.context['request'].user
        membership = GroupMember.objects.filter(group_id=attrs['groupId'], user=user).first()
        if membership is None:
            raise serializers.ValidationError({'groupId': 'You must be a member of this group.'})
        if not has_role_at_least(membership.role, GroupMember.Role.MEMBER):
            raise serializers.ValidationError({'groupId': 'Viewers cannot create trips.'})
        return attrs

    def create(self, validated_data):
        return Trip.objects.create(
            group_id=validated_data['groupId'],
            name=validated_data['name'],
            description=validated_data.get('description', ''),
            destination=validated_data.get('destination', ''),
            start_date=validated_data.get('startDate'),
            end_date=validated_data.get('endDate'),
            created_by=self.context['request'].user,
        )


class TripUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    destination = serializers.CharField(max_length=255, required=False, allow_blank=True)
    startDate = serializers.DateField(required=False, allow_null=True)
    endDate = serializers.DateField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=Trip.Status.choices, required=False)

    field_map = {
        'name': 'name',
        'description': 'description',
        'destination': 'destination',
        'startDate': 'start_date',
        'endDate': 'end_date',
        'status': 'status',
    }

    def validate(self, attrs):
        start_date = attrs.get('startDate', self.instance.start_date)
        end_date = attrs.get('endDate', self.instance.end_date)
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({'endDate': 'End date must be after start date.'})
        return attrs

    def update(self, instance, validated_data):
        for key, value in validated_data.items():
            setattr(instance, self.field_map[key], value)
        instance.save()
        return instance

from rest_framework import serializers
from .models import Circle
from apps.accounts.models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class CircleSerializer(serializers.ModelSerializer):
    """Main serializer for circles."""

    created_by = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    is_primary = serializers.SerializerMethodField()

    class Meta:
        model = Circle
        fields = [
            'id',
            'name',
            'created_by',
            'member_count',
            'is_primary',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        """Get number of active members in the circle."""
        return obj.active_memberships().count()

    def get_is_primary(self, obj):
        """Whether this is the current user's primary circle."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return request.user.primary_circle_id == obj.id
        return False


class CircleCreateSerializer(serializers.Serializer):
    """Serializer for creating circles."""

    name = serializers.CharField(max_length=200)


class CircleMemberSerializer(serializers.Serializer):
    """Active member entry as returned by list_members."""

    user_id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    joined_at = serializers.DateTimeField(read_only=True)


class JoinByNameSerializer(serializers.Serializer):
    """Serializer for joining a circle by its exact name."""

    name = serializers.CharField(max_length=200)


class RemoveMemberSerializer(serializers.Serializer):
    """Serializer for removing a member."""

    user_id = serializers.CharField(max_length=64)

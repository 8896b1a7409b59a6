from rest_framework import serializers
from .models import User


class PrimaryCircleSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class UserSerializer(serializers.ModelSerializer):
    """Current user with their primary circle."""

    primary_circle = PrimaryCircleSerializer(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id',
            'display_name',
            'primary_circle',
            'created_at',
        ]
        read_only_fields = ['id', 'primary_circle', 'created_at']


class UpdateProfileSerializer(serializers.Serializer):
    """Serializer for renaming the current user."""

    display_name = serializers.CharField(max_length=100)

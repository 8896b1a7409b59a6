from rest_framework import serializers
from .models import Event, Participant
from apps.circles.serializers import UserMinimalSerializer


class ParticipantSerializer(serializers.ModelSerializer):
    """Participant row with its share."""

    user = UserMinimalSerializer(read_only=True)
    amount = serializers.IntegerField(read_only=True)

    class Meta:
        model = Participant
        fields = [
            'id',
            'user',
            'position',
            'amount',
            'reported',
            'reported_at',
            'approved',
            'approved_at',
        ]
        read_only_fields = fields


class EventSerializer(serializers.ModelSerializer):
    """Main serializer for events."""

    organizer = UserMinimalSerializer(read_only=True)
    circle_name = serializers.CharField(source='circle.name', read_only=True)
    participants = ParticipantSerializer(many=True, read_only=True)

    class Meta:
        model = Event
        fields = [
            'id',
            'circle',
            'circle_name',
            'organizer',
            'name',
            'total_amount',
            'split_amount',
            'status',
            'participants',
            'created_at',
            'updated_at',
            'completed_at',
        ]
        read_only_fields = fields


class EventListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    organizer = UserMinimalSerializer(read_only=True)
    circle_name = serializers.CharField(source='circle.name', read_only=True)

    class Meta:
        model = Event
        fields = [
            'id',
            'circle',
            'circle_name',
            'organizer',
            'name',
            'total_amount',
            'split_amount',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class EventCreateSerializer(serializers.Serializer):
    """
    Input serializer for creating events.

    ``circle`` defaults to the caller's primary circle.
    """

    circle = serializers.IntegerField(required=False)
    name = serializers.CharField(max_length=200)
    total_amount = serializers.IntegerField(min_value=1)
    participant_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        allow_empty=False,
    )
    draft = serializers.BooleanField(required=False, default=False)


class EventSummarySerializer(serializers.Serializer):
    """Payment progress of an event."""

    event = EventListSerializer(read_only=True)
    total_amount = serializers.IntegerField()
    split_amount = serializers.IntegerField()
    participant_count = serializers.IntegerField()
    reported_count = serializers.IntegerField()
    approved_count = serializers.IntegerField()
    collected_amount = serializers.IntegerField()
    outstanding_amount = serializers.IntegerField()
    participants = ParticipantSerializer(many=True, read_only=True)


class PendingApprovalSerializer(serializers.Serializer):
    """Reported payment waiting for approval."""

    participant_row_id = serializers.IntegerField()
    event_id = serializers.IntegerField()
    event_name = serializers.CharField()
    circle_id = serializers.IntegerField()
    circle_name = serializers.CharField()
    user_id = serializers.CharField()
    participant_name = serializers.CharField()
    amount = serializers.IntegerField()
    reported_at = serializers.DateTimeField()


class ApproveInputSerializer(serializers.Serializer):
    """Input serializer for approving payments."""

    participant_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
    )


class ApproveResultSerializer(serializers.Serializer):
    approved = serializers.IntegerField()

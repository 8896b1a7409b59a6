from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Event
from .serializers import (
    EventSerializer,
    EventListSerializer,
    EventCreateSerializer,
    EventSummarySerializer,
    ParticipantSerializer,
    PendingApprovalSerializer,
    ApproveInputSerializer,
    ApproveResultSerializer,
)
from .permissions import IsEventParticipantOrOrganizer

from apps.accounts.services import get_primary_circle
from apps.events.services import (
    create_event,
    confirm_event,
    report_payment,
    get_event_summary,
    list_events_for_user,
    list_unpaid_events_for_user,
    list_pending,
    approve,
    InvalidEventError,
)


class EventViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for events.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Events the user organizes or participates in
    create: Create an event in a circle (primary circle by default)
    retrieve: Get a specific event with its participants
    """

    queryset = Event.objects.select_related('circle', 'organizer').prefetch_related('participants__user')
    serializer_class = EventSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['retrieve', 'summary']:
            return [IsAuthenticated(), IsEventParticipantOrOrganizer()]
        return [IsAuthenticated()]

    def list(self, request, *args, **kwargs):
        """List the user's events, newest first."""
        events = list_events_for_user(user_id=request.user.id)
        serializer = EventListSerializer(events, many=True)
        return Response(serializer.data)

    @extend_schema(request=EventCreateSerializer, responses={201: EventSerializer})
    def create(self, request, *args, **kwargs):
        """Create an event and notify its participants."""
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        circle_id = data.get('circle')
        if circle_id is None:
            primary = get_primary_circle(user_id=request.user.id)
            if primary is None:
                raise InvalidEventError('No circle given and no primary circle set.')
            circle_id = primary.id

        event = create_event(
            circle_id=circle_id,
            creator_id=request.user.id,
            name=data['name'],
            total_amount=data['total_amount'],
            participant_ids=data['participant_ids'],
            draft=data.get('draft', False),
        )

        output_serializer = EventSerializer(self.get_queryset().get(id=event.id))
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: EventSummarySerializer})
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """Get payment progress of the event."""
        event = self.get_object()
        summary = get_event_summary(event_id=event.id)
        return Response(EventSummarySerializer(summary).data)

    @extend_schema(request=None, responses={200: EventSerializer})
    @action(detail=True, methods=['post'])
    def confirm(self, request, pk=None):
        """Confirm a draft event (organizer only)."""
        event = confirm_event(event_id=pk, organizer_id=request.user.id)

        output_serializer = EventSerializer(self.get_queryset().get(id=event.id))
        return Response(output_serializer.data)

    @extend_schema(request=None, responses={200: ParticipantSerializer})
    @action(detail=True, methods=['post'])
    def report_payment(self, request, pk=None):
        """Report that the caller paid their share."""
        participant = report_payment(event_id=pk, user_id=request.user.id)
        return Response(ParticipantSerializer(participant).data)

    @extend_schema(responses={200: EventListSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def unpaid(self, request):
        """Confirmed events where the caller hasn't reported yet."""
        events = list_unpaid_events_for_user(user_id=request.user.id)
        serializer = EventListSerializer(events, many=True)
        return Response(serializer.data)


class ApprovalViewSet(viewsets.ViewSet):
    """
    Organizer's approval queue.

    list: Reported payments waiting for the caller's approval
    approve: Approve a batch of participant rows
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: PendingApprovalSerializer(many=True)})
    def list(self, request):
        pending = list_pending(organizer_id=request.user.id)
        return Response(PendingApprovalSerializer(pending, many=True).data)

    @extend_schema(request=ApproveInputSerializer, responses={200: ApproveResultSerializer})
    @action(detail=False, methods=['post'])
    def approve(self, request):
        serializer = ApproveInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        approved = approve(
            organizer_id=request.user.id,
            participant_row_ids=serializer.validated_data['participant_ids'],
        )
        return Response({'approved': approved})

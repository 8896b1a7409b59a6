from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Circle
from .serializers import (
    CircleSerializer,
    CircleCreateSerializer,
    CircleMemberSerializer,
    JoinByNameSerializer,
    RemoveMemberSerializer,
)
from .permissions import IsCircleMember

from apps.circles.services import (
    create_circle,
    join_circle,
    join_circle_by_name,
    leave_circle,
    remove_member,
    list_members,
    list_user_circles,
    search_circles,
    set_primary_circle,
)


class CircleViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for circles.

    All business logic is handled by services.
    Views are thin HTTP handlers only; domain errors propagate and are
    rendered by DRF.

    list: Circles the user is an active member of
    create: Create a new circle
    retrieve: Get a specific circle
    """

    queryset = Circle.objects.select_related('created_by')
    serializer_class = CircleSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action == 'members':
            return [IsAuthenticated(), IsCircleMember()]
        return [IsAuthenticated()]

    def _refresh_user(self, request):
        # Services update the primary pointer with conditional UPDATEs
        request.user.refresh_from_db(fields=['primary_circle'])

    def list(self, request, *args, **kwargs):
        """List circles the user belongs to, most recently joined first."""
        circles = list_user_circles(user_id=request.user.id)
        serializer = CircleSerializer(circles, many=True, context={'request': request})
        return Response(serializer.data)

    @extend_schema(request=CircleCreateSerializer, responses={201: CircleSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new circle."""
        serializer = CircleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        circle = create_circle(
            creator_id=request.user.id,
            name=serializer.validated_data['name'],
        )
        self._refresh_user(request)

        output_serializer = CircleSerializer(circle, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[OpenApiParameter('exclude_me', bool, description='Leave the caller out')],
        responses={200: CircleMemberSerializer(many=True)},
    )
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get active members of the circle."""
        circle = self.get_object()
        exclude_me = request.query_params.get('exclude_me', '').lower() in ('1', 'true', 'yes')

        members = list_members(
            circle_id=circle.id,
            excluding_user_id=request.user.id if exclude_me else None,
        )
        serializer = CircleMemberSerializer(members, many=True)
        return Response(serializer.data)

    @extend_schema(request=None, responses={201: CircleSerializer})
    @action(detail=True, methods=['post'])
    def join(self, request, pk=None):
        """Join a circle."""
        membership = join_circle(user_id=request.user.id, circle_id=pk)
        self._refresh_user(request)

        output_serializer = CircleSerializer(membership.circle, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={204: None})
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a circle."""
        leave_circle(user_id=request.user.id, circle_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=RemoveMemberSerializer, responses={204: None})
    @action(detail=True, methods=['post'])
    def remove_member(self, request, pk=None):
        """Remove a member from the circle (creator only)."""
        serializer = RemoveMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        remove_member(
            acting_user_id=request.user.id,
            circle_id=pk,
            target_user_id=serializer.validated_data['user_id'],
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: CircleSerializer})
    @action(detail=True, methods=['post'])
    def primary(self, request, pk=None):
        """Make this circle the user's primary circle."""
        user = set_primary_circle(user_id=request.user.id, circle_id=pk)
        self._refresh_user(request)

        output_serializer = CircleSerializer(user.primary_circle, context={'request': request})
        return Response(output_serializer.data)

    @extend_schema(request=JoinByNameSerializer, responses={201: CircleSerializer})
    @action(detail=False, methods=['post'])
    def join_by_name(self, request):
        """Join the single circle with exactly this name."""
        serializer = JoinByNameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = join_circle_by_name(
            user_id=request.user.id,
            name=serializer.validated_data['name'],
        )
        self._refresh_user(request)

        output_serializer = CircleSerializer(membership.circle, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[OpenApiParameter('q', str, required=True, description='Part of the circle name')],
        responses={200: CircleSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def search(self, request):
        """Search circles by name."""
        circles = search_circles(query=request.query_params.get('q', ''))
        serializer = CircleSerializer(circles, many=True, context={'request': request})
        return Response(serializer.data)

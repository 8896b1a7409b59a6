from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import UserSerializer, UpdateProfileSerializer
from .services import get_user, register_user


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Get the current authenticated user with their primary circle.",
    tags=['auth'],
)
@extend_schema(
    methods=['PATCH'],
    request=UpdateProfileSerializer,
    responses={200: UserSerializer},
    description="Update the current user's display name.",
    tags=['auth'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def me(request):
    """Current user profile."""
    if request.method == 'PATCH':
        serializer = UpdateProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        register_user(
            user_id=request.user.id,
            display_name=serializer.validated_data['display_name'],
        )

    user = get_user(user_id=request.user.id)
    return Response(UserSerializer(user).data)

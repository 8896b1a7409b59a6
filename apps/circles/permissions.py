from rest_framework import permissions


class IsCircleMember(permissions.BasePermission):
    """
    Permission: User must be an active member of the circle.
    """
    message = 'You must be a member of this circle.'

    def has_object_permission(self, request, view, obj):
        # obj is a Circle instance
        return obj.has_member(request.user.id)

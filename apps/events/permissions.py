"""
Custom permission classes for events app.

Object-level checks for event detail views. Mutations enforce the same
rules again in the services.
"""
from rest_framework.permissions import BasePermission


class IsEventParticipantOrOrganizer(BasePermission):
    """
    Permission to view an event.

    Allows access if the user organizes the event or is one of its
    participants.
    """

    message = 'You are not part of this event.'

    def has_object_permission(self, request, view, obj):
        if obj.organizer_id == request.user.id:
            return True
        return obj.participants.filter(user_id=request.user.id).exists()

# ==========================================
# apps/events/admin.py
# ==========================================

from django.contrib import admin
from apps.events.models import Event, Participant


class ParticipantInline(admin.TabularInline):
    """Inline admin for event participants."""
    model = Participant
    extra = 0
    fields = ['user', 'position', 'reported', 'reported_at', 'approved', 'approved_at']
    readonly_fields = ['reported_at', 'approved_at']


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """Admin interface for Events."""

    list_display = [
        'name',
        'circle',
        'organizer',
        'total_amount',
        'split_amount',
        'status',
        'approved_progress',
        'created_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'circle__name', 'organizer__display_name']
    readonly_fields = ['split_amount', 'created_at', 'updated_at', 'completed_at']
    inlines = [ParticipantInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def approved_progress(self, obj):
        """Show approved / total participants."""
        total = obj.participants.count()
        approved = obj.participants.filter(approved=True).count()
        return f"{approved}/{total}"
    approved_progress.short_description = 'Approved'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('circle', 'organizer')


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """Admin interface for Participants."""

    list_display = ['user', 'event', 'reported', 'approved', 'reported_at', 'approved_at']
    list_filter = ['reported', 'approved']
    search_fields = ['user__display_name', 'user__id', 'event__name']
    readonly_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'event')

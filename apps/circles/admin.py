# ==========================================
# apps/circles/admin.py
# ==========================================

from django.contrib import admin
from apps.circles.models import Circle, CircleMembership, MembershipStatus


class CircleMembershipInline(admin.TabularInline):
    """Inline admin for circle memberships."""
    model = CircleMembership
    extra = 0
    fields = ['user', 'status', 'joined_at', 'left_at']
    readonly_fields = ['joined_at', 'left_at']


@admin.register(Circle)
class CircleAdmin(admin.ModelAdmin):
    """Admin interface for Circles."""

    list_display = ['name', 'created_by', 'member_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'created_by__display_name', 'created_by__id']
    readonly_fields = ['created_at']
    inlines = [CircleMembershipInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of active members."""
        return obj.memberships.filter(status=MembershipStatus.ACTIVE).count()
    member_count.short_description = 'Members'


@admin.register(CircleMembership)
class CircleMembershipAdmin(admin.ModelAdmin):
    """Admin interface for Circle Memberships."""

    list_display = ['user', 'circle', 'status', 'joined_at', 'left_at']
    list_filter = ['status', 'joined_at']
    search_fields = ['user__display_name', 'user__id', 'circle__name']
    readonly_fields = ['joined_at', 'left_at']
    date_hierarchy = 'joined_at'
    ordering = ['-joined_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'circle')

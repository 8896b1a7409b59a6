# ==========================================
# apps/circles/models.py
# ==========================================

from django.db import models
from django.utils import timezone


class MembershipStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    LEFT = 'left', 'Left'
    REMOVED = 'removed', 'Removed'


class Circle(models.Model):
    """Named group of users sharing expense events."""

    name = models.CharField(max_length=200)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='created_circles'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'circles'
        indexes = [
            models.Index(fields=['name'], name='circles_name_1d0c6e_idx'),
            models.Index(fields=['created_by', 'created_at'], name='circles_created_8f2b3a_idx'),
        ]
        ordering = ['name', 'id']

    def __str__(self):
        return self.name

    def active_memberships(self):
        return self.memberships.filter(status=MembershipStatus.ACTIVE)

    def has_member(self, user_id):
        return self.active_memberships().filter(user_id=user_id).exists()

    def is_creator(self, user_id):
        return self.created_by_id == user_id


class CircleMembership(models.Model):
    """
    User membership in a circle.

    One row per (user, circle). Leaving or being removed flips the status;
    joining again reactivates the same row.
    """

    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='circle_memberships')
    circle = models.ForeignKey(Circle, on_delete=models.CASCADE, related_name='memberships')
    status = models.CharField(max_length=20, choices=MembershipStatus.choices, default=MembershipStatus.ACTIVE)
    joined_at = models.DateTimeField(default=timezone.now)
    left_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'circle_memberships'
        unique_together = [['user', 'circle']]
        indexes = [
            models.Index(fields=['circle', 'status'], name='circle_memb_circle__4a7e21_idx'),
            models.Index(fields=['user', 'status', 'joined_at'], name='circle_memb_user_id_93c5d0_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.circle.name} ({self.status})"

    @property
    def is_active(self):
        return self.status == MembershipStatus.ACTIVE

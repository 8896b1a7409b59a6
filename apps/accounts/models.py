from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models


class UserManager(BaseUserManager):
    """Manager for users identified by an externally issued id."""

    def create_user(self, id, display_name='', password=None, **extra_fields):
        if not id:
            raise ValueError('User id is required')

        user = self.model(id=id, display_name=display_name, **extra_fields)
        if password:
            user.set_password(password)
        else:
            # Identity comes from the login bridge, not from a local password
            user.set_unusable_password()
        user.save(using=self._db, force_insert=True)
        return user

    def create_superuser(self, id, display_name='', password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(id, display_name, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Circle member, keyed by the opaque id of the identity provider."""

    id = models.CharField(primary_key=True, max_length=64)
    display_name = models.CharField(max_length=100, blank=True)

    # Default context for creating events
    primary_circle = models.ForeignKey(
        'circles.Circle',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='primary_for'
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'id'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_6541e9_idx'),
        ]

    def __str__(self):
        return self.get_display_name()

    def get_display_name(self):
        """Return display name or the raw id."""
        return self.display_name or self.id

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from tenant.managers import BusinessScopedQuerySet


def default_roles():
    return [User.Role.USER]


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("The email address must be set")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("roles", [User.Role.ADMIN])

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Authenticated principal.

    A user belongs to at most one business. Users without a business can only
    reach tenant data if they are listed as an active PlatformAdmin.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", _("Admin")
        USER = "user", _("User")
        CASHIER = "cashier", _("Cashier")

    business = models.ForeignKey(
        'tenant.Business',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='users',
        help_text=_("The business this user belongs to")
    )

    # Email is the login and is unique across all businesses
    email = models.EmailField(_("email address"), unique=True)
    first_name = models.CharField(_("first name"), max_length=150, blank=True)
    last_name = models.CharField(_("last name"), max_length=150, blank=True)

    roles = models.JSONField(
        _("roles"),
        default=default_roles,
        blank=True,
        help_text=_("Subset of: admin, user, cashier"),
    )

    is_active = models.BooleanField(_("active"), default=True)
    is_staff = models.BooleanField(
        _("staff status"),
        default=False,
        help_text=_("Designates whether the user can log into this admin site."),
    )
    date_joined = models.DateTimeField(_("date joined"), default=timezone.now)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        indexes = [
            models.Index(fields=['business', 'is_active'], name='users_user_busines_4f0b1d_idx'),
        ]

    def __str__(self):
        return self.email

    def has_role(self, role):
        return role in (self.roles or [])

    @property
    def is_business_admin(self):
        return self.has_role(self.Role.ADMIN)


class PlatformAdmin(models.Model):
    """
    Allow-list of principals that bypass business scoping.

    Only rows with ``is_active=True`` grant access; deactivating a row revokes
    the bypass without deleting the user.
    """
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='platform_admin',
    )
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'super_admins'
        ordering = ['email']

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        if not self.email and self.user_id:
            self.email = self.user.email
        super().save(*args, **kwargs)


class UserProfile(models.Model):
    """Staff profile of a user inside a business."""

    class Role(models.TextChoices):
        ADMIN = "admin", _("Admin")
        MANAGER = "manager", _("Manager")
        CASHIER = "cashier", _("Cashier")
        STAFF = "staff", _("Staff")

    business = models.ForeignKey(
        'tenant.Business',
        on_delete=models.CASCADE,
        related_name='user_profiles',
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='profiles',
        null=True,
        blank=True,
    )
    prefix = models.CharField(max_length=20, blank=True)
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150, blank=True)
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.STAFF)
    is_active = models.BooleanField(default=True)
    allow_login = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BusinessScopedQuerySet.as_manager()

    class Meta:
        db_table = 'user_profiles'
        ordering = ['username']
        indexes = [
            models.Index(fields=['business', 'role'], name='user_profil_busines_9a2c3e_idx'),
        ]

    def __str__(self):
        return self.username

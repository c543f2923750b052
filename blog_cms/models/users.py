"""
User model for django-blog-cms.

Set ``AUTH_USER_MODEL = "blog_cms.User"`` in your project settings.
"""
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """Manager that creates users keyed by email."""

    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address")
        user = self.model(email=self.normalize_email(email), **extra_fields)
        # No password means an OAuth-only account
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields["role"] = User.ROLE_ADMIN
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser):
    """
    Account that can author posts.

    Authorization is driven by ``role`` alone: ADMIN users manage other
    users, categories and every post, and are treated as staff and
    superusers by the Django admin site.
    """

    ROLE_USER = "USER"
    ROLE_ADMIN = "ADMIN"
    ROLE_CHOICES = [
        (ROLE_USER, "User"),
        (ROLE_ADMIN, "Admin"),
    ]

    name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(max_length=254, unique=True)
    username = models.CharField(max_length=50, unique=True, null=True, blank=True)
    image = models.URLField(max_length=500, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    EMAIL_FIELD = "email"
    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.username or self.email

    def save(self, *args, **kwargs):
        # Blank usernames are stored as NULL so uniqueness ignores them
        if not self.username:
            self.username = None
        super().save(*args, **kwargs)

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def is_staff(self):
        return self.is_admin

    @property
    def is_superuser(self):
        return self.is_admin

    def has_perm(self, perm, obj=None):
        return self.is_active and self.is_admin

    def has_module_perms(self, app_label):
        return self.is_active and self.is_admin

    def get_full_name(self):
        return self.name or str(self)

    def get_short_name(self):
        return self.username or self.email

    def to_summary_dict(self):
        """Author fields embedded in post payloads."""
        return {
            "id": self.pk,
            "name": self.name or None,
            "email": self.email,
            "image": self.image or None,
        }

    def to_dict(self):
        """Public profile; the password hash is never included."""
        return {
            "id": self.pk,
            "name": self.name or None,
            "email": self.email,
            "username": self.username,
            "role": self.role,
            "image": self.image or None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

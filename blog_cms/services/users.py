"""
User accounts and roles.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from ..exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..forms import PasswordChangeForm, ProfileForm, RegistrationForm, RoleForm
from ..models import User

logger = logging.getLogger(__name__)


def _get_user(user_id):
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        raise NotFoundError("User not found")


def _validated(form_class, data):
    form = form_class(data)
    if not form.is_valid():
        raise ValidationError.from_form(form)
    return form.cleaned_data


def list_users(ctx):
    """All users, newest first, each annotated with ``post_count``."""
    ctx.require_admin()
    return list(User.objects.annotate(post_count=Count("posts")).order_by("-created_at", "-id"))


def update_role(ctx, data):
    identity = ctx.require_admin()
    cleaned = _validated(RoleForm, data)

    user = _get_user(cleaned["userId"])
    user.role = cleaned["role"]
    user.save(update_fields=["role", "updated_at"])
    logger.info("Admin %s set role of user %s to %s", identity.id, user.pk, user.role)
    return user


def delete_user(ctx, user_id):
    """Delete a user and, with them, their posts. Admins may not delete themselves."""
    identity = ctx.require_admin()
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise ValidationError("userId is required", {"userId": ["Not an integer"]})
    if user_id == identity.id:
        raise ForbiddenError("You cannot delete your own account")

    user = _get_user(user_id)
    user.delete()
    logger.info("Admin %s deleted user %s", identity.id, user_id)


def update_profile(ctx, data):
    """
    Update the caller's name, email and username.

    Another user already holding the email or username is a conflict;
    the caller keeping their own values is not.
    """
    identity = ctx.require_authenticated()
    cleaned = _validated(ProfileForm, data)
    email, username = cleaned["email"], cleaned["username"]

    existing = (
        User.objects.filter(Q(email=email) | Q(username=username))
        .exclude(pk=identity.id)
        .first()
    )
    if existing is not None:
        if existing.email == email:
            raise ConflictError("Email already taken by another user")
        if existing.username == username:
            raise ConflictError("Username already taken by another user")

    user = _get_user(identity.id)
    user.name = cleaned["name"]
    user.email = email
    user.username = username
    try:
        with transaction.atomic():
            user.save()
    except IntegrityError:
        # Lost a race with another account claiming the same values
        raise ConflictError("Email or username already taken by another user")
    return user


def register_user(ctx, data):
    """
    Create an account with a hashed password.

    Visitors register themselves as USER; admins may also choose the role.
    """
    cleaned = _validated(RegistrationForm, data)
    role = cleaned["role"] or User.ROLE_USER
    if role != User.ROLE_USER and not ctx.is_admin:
        raise ForbiddenError("Only admins can create admin accounts")

    email, username = cleaned["email"], cleaned["username"] or None
    if User.objects.filter(email=email).exists():
        raise ConflictError("Email already registered")
    if username and User.objects.filter(username=username).exists():
        raise ConflictError("Username already taken")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email,
                cleaned["password"],
                name=cleaned["name"],
                username=username,
                role=role,
            )
    except IntegrityError:
        raise ConflictError("Email or username already taken")

    logger.info("Registered user %s (%s)", user.pk, role)
    return user


def change_password(ctx, data):
    identity = ctx.require_authenticated()
    cleaned = _validated(PasswordChangeForm, data)

    user = _get_user(identity.id)
    if not user.check_password(cleaned["currentPassword"]):
        raise ValidationError(
            "Current password is incorrect",
            {"currentPassword": ["Current password is incorrect"]},
        )
    user.set_password(cleaned["newPassword"])
    user.save(update_fields=["password", "updated_at"])
    return user

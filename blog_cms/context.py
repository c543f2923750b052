"""
Request identity and authorization checks.

Every service call receives a ``RequestContext`` describing who is
acting. Credentials are verified by ``django.contrib.auth`` before a
context is built; this module only consumes the resolved identity.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import ForbiddenError, UnauthorizedError
from .models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The signed-in user's id and role."""

    id: int
    role: str = User.ROLE_USER

    @property
    def is_admin(self):
        return self.role == User.ROLE_ADMIN

    @classmethod
    def from_user(cls, user):
        return cls(id=user.pk, role=user.role)


@dataclass(frozen=True)
class RequestContext:
    """Who is making the current call; ``identity`` is None for visitors."""

    identity: Optional[Identity] = None

    @classmethod
    def anonymous(cls):
        return cls()

    @classmethod
    def for_user(cls, user):
        return cls(identity=Identity.from_user(user))

    @classmethod
    def from_request(cls, request):
        """Build a context from the session user attached by Django."""
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return cls.anonymous()
        return cls.for_user(user)

    @property
    def is_authenticated(self):
        return self.identity is not None

    @property
    def is_admin(self):
        return self.identity is not None and self.identity.is_admin

    @property
    def user_id(self):
        return self.identity.id if self.identity else None

    def require_authenticated(self):
        if self.identity is None:
            raise UnauthorizedError()
        return self.identity

    def require_admin(self):
        identity = self.require_authenticated()
        if not identity.is_admin:
            logger.warning("User %s denied admin-only action", identity.id)
            raise ForbiddenError("Admin access required")
        return identity

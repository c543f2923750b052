"""
Error taxonomy for django-blog-cms.

Services raise these; the view layer turns them into JSON error bodies
with the matching HTTP status.
"""


class CmsError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {"error": self.message}


class UnauthorizedError(CmsError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(CmsError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(CmsError):
    status_code = 404
    default_message = "Not found"


class ConflictError(CmsError):
    status_code = 409
    default_message = "Conflict"


class ValidationError(CmsError):
    """Invalid or missing input. ``errors`` maps field names to messages."""

    status_code = 400
    default_message = "Invalid input"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or {}

    @classmethod
    def from_form(cls, form):
        """Build from a bound, invalid Django form."""
        errors = {
            field: [str(message) for message in messages]
            for field, messages in form.errors.items()
        }
        # Surface the first message so forms can show a single string
        first = next(iter(errors.values()), [cls.default_message])[0]
        return cls(first, errors)

    def as_dict(self):
        data = super().as_dict()
        if self.errors:
            data["details"] = self.errors
        return data

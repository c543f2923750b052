"""
JSON API views for django-blog-cms.

Each view builds a ``RequestContext`` from the session, calls into
``blog_cms.services`` and renders the result. Errors raised by the
services become JSON error responses in ``ApiView.dispatch``.

Writes are session-authenticated, so they go through Django's CSRF
check: clients GET ``auth/session/`` to receive the ``csrftoken``
cookie and send it back in the ``X-CSRFToken`` header. ``login()``
rotates the token, so re-read the cookie after signing in.
"""
import json
import logging

from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import ensure_csrf_cookie

from .context import RequestContext
from .exceptions import CmsError, UnauthorizedError, ValidationError
from .services import categories, posts, users

logger = logging.getLogger(__name__)


class ApiView(View):
    """Base view: resolves the caller and converts errors to JSON."""

    def dispatch(self, request, *args, **kwargs):
        self.ctx = RequestContext.from_request(request)
        try:
            return super().dispatch(request, *args, **kwargs)
        except CmsError as exc:
            return JsonResponse(exc.as_dict(), status=exc.status_code)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return JsonResponse({"error": "Internal server error"}, status=500)

    def json_body(self):
        """Decode the request body as a JSON object."""
        if not self.request.body:
            return {}
        try:
            data = json.loads(self.request.body)
        except ValueError:
            raise ValidationError("Request body must be valid JSON")
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data


def _post_page(post_list, pagination):
    return {
        "posts": [post.to_dict() for post in post_list],
        "pagination": pagination.as_dict(),
    }


class PostCollectionView(ApiView):
    """List posts with filters, or create one."""

    def get(self, request):
        post_list, pagination = posts.list_posts(self.ctx, request.GET)
        return JsonResponse(_post_page(post_list, pagination))

    def post(self, request):
        post = posts.create_post(self.ctx, self.json_body())
        return JsonResponse(post.to_dict(), status=201)


class PostDetailView(ApiView):
    """Read, update or delete a single post by slug."""

    def get(self, request, slug):
        post = posts.get_post(self.ctx, slug)
        return JsonResponse({"post": post.to_dict()})

    def put(self, request, slug):
        post = posts.update_post(self.ctx, slug, self.json_body())
        return JsonResponse({"post": post.to_dict()})

    def delete(self, request, slug):
        posts.delete_post(self.ctx, slug)
        return JsonResponse({"message": "Post deleted successfully"})


class SearchView(ApiView):
    """Search published posts."""

    def get(self, request):
        post_list, pagination, query = posts.search_posts(self.ctx, request.GET)
        payload = _post_page(post_list, pagination)
        payload["query"] = query
        return JsonResponse(payload)


class CategoryCollectionView(ApiView):
    def get(self, request):
        category_list = categories.list_categories(self.ctx)
        return JsonResponse({"categories": [c.to_dict() for c in category_list]})

    def post(self, request):
        category = categories.create_category(self.ctx, self.json_body())
        return JsonResponse(category.to_dict(), status=201)


class UserCollectionView(ApiView):
    """Admin user management."""

    def get(self, request):
        user_list = users.list_users(self.ctx)
        return JsonResponse({
            "users": [
                {**user.to_dict(), "_count": {"posts": user.post_count}}
                for user in user_list
            ]
        })

    def put(self, request):
        user = users.update_role(self.ctx, self.json_body())
        return JsonResponse({"message": "Role updated successfully", "user": user.to_dict()})

    def delete(self, request):
        users.delete_user(self.ctx, request.GET.get("userId"))
        return JsonResponse({"message": "User deleted successfully"})


class ProfileView(ApiView):
    def put(self, request):
        user = users.update_profile(self.ctx, self.json_body())
        return JsonResponse({"message": "Profile updated successfully", "user": user.to_dict()})


class PasswordView(ApiView):
    def put(self, request):
        user = users.change_password(self.ctx, self.json_body())
        # Keep the current session valid after the password hash changes
        update_session_auth_hash(request, user)
        return JsonResponse({"message": "Password changed successfully"})


class RegisterView(ApiView):
    def post(self, request):
        user = users.register_user(self.ctx, self.json_body())
        return JsonResponse({"message": "User created", "user": user.to_dict()}, status=201)


class LoginView(ApiView):
    """Start a session from email and password."""

    def post(self, request):
        data = self.json_body()
        email, password = data.get("email"), data.get("password")
        if not email or not password:
            raise ValidationError("Email and password required")

        user = authenticate(request, email=email, password=password)
        if user is None:
            logger.warning("Failed login for %s", email)
            raise UnauthorizedError("Invalid email or password")
        login(request, user)
        return JsonResponse({"user": user.to_dict()})


class LogoutView(ApiView):
    def post(self, request):
        logout(request)
        return JsonResponse({"message": "Logged out"})


@method_decorator(ensure_csrf_cookie, name="dispatch")
class SessionView(ApiView):
    """Report the signed-in user, if any, and set the CSRF cookie."""

    def get(self, request):
        user = request.user
        return JsonResponse({"user": user.to_dict() if user.is_authenticated else None})


def csrf_failure(request, reason=""):
    """JSON replacement for Django's HTML CSRF failure page."""
    logger.warning("CSRF check failed for %s %s: %s", request.method, request.path, reason)
    return JsonResponse({"error": "CSRF verification failed"}, status=403)

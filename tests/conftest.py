"""
Shared fixtures for django-blog-cms tests.
"""
import pytest

from blog_cms.context import RequestContext
from blog_cms.models import Category, Post, User


@pytest.fixture
def user(db):
    """Create a regular author."""
    return User.objects.create_user(
        email="author@example.com",
        password="testpass123",
        name="Author",
        username="author",
    )


@pytest.fixture
def other_user(db):
    """Create a second regular user."""
    return User.objects.create_user(
        email="other@example.com",
        password="otherpass123",
        name="Other",
        username="other",
    )


@pytest.fixture
def admin(db):
    """Create an administrator."""
    return User.objects.create_superuser(
        email="admin@example.com",
        password="adminpass123",
        username="admin",
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(title="Test Category", slug="test-category")


@pytest.fixture
def post(db, user, category):
    """Create a published post."""
    return Post.objects.create(
        title="Test Post",
        content="This is a test post body.",
        author=user,
        category=category,
        status=Post.STATUS_PUBLISHED,
    )


@pytest.fixture
def anon_ctx():
    return RequestContext.anonymous()


@pytest.fixture
def user_ctx(user):
    return RequestContext.for_user(user)


@pytest.fixture
def other_ctx(other_user):
    return RequestContext.for_user(other_user)


@pytest.fixture
def admin_ctx(admin):
    return RequestContext.for_user(admin)

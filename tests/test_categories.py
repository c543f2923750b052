"""
Tests for the category service.
"""
import pytest

from blog_cms.exceptions import ConflictError, ForbiddenError, UnauthorizedError, ValidationError
from blog_cms.models import Category, Post
from blog_cms.services import categories


class TestCreateCategory:
    def test_admin_creates(self, admin_ctx):
        category = categories.create_category(admin_ctx, {"title": "News", "slug": "news"})
        assert category.pk is not None
        assert category.to_dict() == {"id": category.pk, "title": "News", "slug": "news"}

    def test_non_admin_forbidden(self, user_ctx, anon_ctx):
        with pytest.raises(ForbiddenError):
            categories.create_category(user_ctx, {"title": "News", "slug": "news"})
        with pytest.raises(UnauthorizedError):
            categories.create_category(anon_ctx, {"title": "News", "slug": "news"})
        assert Category.objects.count() == 0

    @pytest.mark.parametrize(
        "data",
        [
            {"title": "News"},
            {"slug": "news"},
            {"title": "", "slug": "news"},
            {"title": "News", "slug": "not a slug!"},
        ],
    )
    def test_validation(self, admin_ctx, data):
        with pytest.raises(ValidationError):
            categories.create_category(admin_ctx, data)

    def test_duplicate_slug(self, admin_ctx, category):
        with pytest.raises(ConflictError):
            categories.create_category(admin_ctx, {"title": "Again", "slug": category.slug})


class TestListCategories:
    def test_all_by_title(self, db, anon_ctx):
        Category.objects.create(title="Zeta", slug="zeta")
        Category.objects.create(title="Alpha", slug="alpha")
        titles = [c.title for c in categories.list_categories(anon_ctx)]
        assert titles == ["Alpha", "Zeta"]


def test_deleting_category_uncategorizes_posts(post, category):
    category.delete()
    post.refresh_from_db()
    assert post.category is None

"""
Filtering, searching and pagination for post listings.

Request parameters are parsed into a ``PostFilter``, which
``compile_post_filter`` turns into a single ``Q`` object.
"""
import math
from dataclasses import dataclass
from typing import Optional

from django.db.models import Q

from .conf import blog_settings
from .exceptions import ValidationError
from .models import Post

STATUS_VALUES = [value for value, _label in Post.STATUS_CHOICES]


def _positive_int(params, name, default):
    raw = params.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive integer", {name: ["Not an integer"]})
    if value < 1:
        raise ValidationError(f"{name} must be a positive integer", {name: ["Must be at least 1"]})
    return value


def _optional_str(params, name):
    value = params.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class PostFilter:
    """Optional constraints on a post listing, plus the requested page."""

    page: int = 1
    limit: int = 10
    category: Optional[str] = None
    search: Optional[str] = None
    status: Optional[str] = None
    author_id: Optional[int] = None
    # Exact keyword membership, ORed into the search clause
    keyword: Optional[str] = None

    @classmethod
    def from_params(cls, params, **overrides):
        """
        Parse request query parameters.

        Blank values count as absent. ``limit`` defaults to
        POSTS_PER_PAGE and is capped at MAX_POSTS_PER_PAGE.
        """
        limit = _positive_int(params, "limit", blog_settings.POSTS_PER_PAGE)
        status = _optional_str(params, "status")
        if status is not None and status not in STATUS_VALUES:
            raise ValidationError(
                f"status must be one of {', '.join(STATUS_VALUES)}",
                {"status": [f"Unknown status {status}"]},
            )
        author_id = _optional_str(params, "authorId")
        if author_id is not None:
            try:
                author_id = int(author_id)
            except ValueError:
                raise ValidationError("authorId must be an integer", {"authorId": ["Not an integer"]})

        values = {
            "page": _positive_int(params, "page", 1),
            "limit": min(limit, blog_settings.MAX_POSTS_PER_PAGE),
            "category": _optional_str(params, "category"),
            "search": _optional_str(params, "search"),
            "status": status,
            "author_id": author_id,
        }
        values.update(overrides)
        return cls(**values)

    @property
    def skip(self):
        return (self.page - 1) * self.limit


def compile_post_filter(post_filter):
    """AND together every constraint set on ``post_filter``."""
    condition = Q()

    if post_filter.category:
        condition &= Q(category__slug=post_filter.category)

    if post_filter.search:
        text_match = (
            Q(title__icontains=post_filter.search)
            | Q(content__icontains=post_filter.search)
            | Q(excerpt__icontains=post_filter.search)
        )
        if post_filter.keyword:
            text_match |= Q(keyword_entries__value=post_filter.keyword)
        condition &= text_match

    if post_filter.status:
        condition &= Q(status=post_filter.status)

    if post_filter.author_id is not None:
        condition &= Q(author_id=post_filter.author_id)

    return condition


@dataclass(frozen=True)
class Pagination:
    total: int
    page: int
    limit: int

    @property
    def pages(self):
        return math.ceil(self.total / self.limit)

    def as_dict(self):
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "pages": self.pages,
        }


def paginate(queryset, post_filter):
    """
    Return one page of ``queryset`` and its pagination metadata.

    The total is counted separately from the page query. Pages past the
    end are empty rather than an error.
    """
    total = queryset.count()
    items = list(queryset[post_filter.skip:post_filter.skip + post_filter.limit])
    return items, Pagination(total=total, page=post_filter.page, limit=post_filter.limit)


def filter_posts(post_filter, base=None):
    """Apply ``post_filter`` to ``base`` (all posts by default), newest first."""
    queryset = base if base is not None else Post.objects.all()
    queryset = queryset.filter(compile_post_filter(post_filter))
    if post_filter.keyword:
        # The keyword join can repeat a post once per matching entry
        queryset = queryset.distinct()
    return queryset.order_by("-created_at", "-id")

"""
Post lifecycle: create, read, update, delete, list and search.
"""
import logging

from django.db import IntegrityError, transaction

from ..conf import blog_settings
from ..exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..forms import PostCreateForm, PostUpdateForm
from ..models import Post
from ..query import PostFilter, filter_posts, paginate

logger = logging.getLogger(__name__)


def _get_post(slug):
    try:
        return Post.objects.with_relations().get(slug=slug)
    except Post.DoesNotExist:
        raise NotFoundError("Post not found")


def _insert_with_unique_slug(post):
    """
    Insert ``post`` under a slug no other post holds.

    The slug is chosen from a snapshot of existing slugs, so a concurrent
    insert can still claim it first. The unique constraint rejects the
    loser, which retries with the next free suffix.
    """
    attempts = blog_settings.SLUG_CREATE_ATTEMPTS
    taken = set()
    for attempt in range(1, attempts + 1):
        post.assign_slug(taken)
        try:
            with transaction.atomic():
                post.save(force_insert=True)
            return post
        except IntegrityError:
            if not Post.objects.filter(slug=post.slug).exists():
                raise
            logger.warning(
                "Slug %r taken concurrently (attempt %d of %d)", post.slug, attempt, attempts
            )
            taken.add(post.slug)
    raise ConflictError("Could not allocate a unique slug for this title")


def create_post(ctx, data):
    """Create a post authored by the caller."""
    identity = ctx.require_authenticated()

    form = PostCreateForm(data)
    if not form.is_valid():
        raise ValidationError.from_form(form)
    cleaned = form.cleaned_data

    post = Post(
        title=cleaned["title"],
        content=cleaned["content"],
        excerpt=cleaned["excerpt"] or Post.excerpt_from(cleaned["content"]),
        thumbnail=cleaned["thumbnail"],
        category=cleaned["categoryId"],
        status=cleaned["status"],
        author_id=identity.id,
    )
    with transaction.atomic():
        _insert_with_unique_slug(post)
        post.set_keywords(cleaned["keywords"])

    logger.info("User %s created post %r", identity.id, post.slug)
    return _get_post(post.slug)


def get_post(ctx, slug):
    """
    Fetch a post for reading.

    Reads by anyone but an admin count as a view. Posts the caller may
    not see are reported as missing.
    """
    post = _get_post(slug)
    if ctx.is_admin:
        return post
    if not post.can_view(ctx.identity):
        raise NotFoundError("Post not found")
    if not post.increment_views():
        raise NotFoundError("Post not found")
    return post


def update_post(ctx, slug, data):
    """
    Apply a partial update. The slug stays as it was, even when the
    title changes.
    """
    identity = ctx.require_authenticated()
    post = _get_post(slug)
    if not post.can_view(identity):
        raise NotFoundError("Post not found")
    if not post.can_modify(identity):
        raise ForbiddenError("You can only edit your own posts")

    form = PostUpdateForm(data)
    if not form.is_valid():
        raise ValidationError.from_form(form)
    changes = form.changes

    keywords = changes.pop("keywords", None)
    if "categoryId" in changes:
        changes["category"] = changes.pop("categoryId")
    for field, value in changes.items():
        setattr(post, field, value)

    with transaction.atomic():
        # Saving only the touched columns leaves concurrent view counts alone
        post.save(update_fields=[*changes, "updated_at"])
        if keywords is not None:
            post.set_keywords(keywords)

    logger.info("User %s updated post %r", identity.id, slug)
    return _get_post(slug)


def delete_post(ctx, slug):
    identity = ctx.require_authenticated()
    post = _get_post(slug)
    if not post.can_view(identity):
        raise NotFoundError("Post not found")
    if not post.can_modify(identity):
        raise ForbiddenError("You can only delete your own posts")
    post.delete()
    logger.info("User %s deleted post %r", identity.id, slug)


def list_posts(ctx, params):
    """Return ``(posts, pagination)`` for the caller's filters."""
    post_filter = PostFilter.from_params(params)
    base = Post.objects.with_relations().visible_to(ctx.identity)
    return paginate(filter_posts(post_filter, base), post_filter)


def search_posts(ctx, params):
    """
    Search published posts by text or exact keyword.

    Returns ``(posts, pagination, query)``.
    """
    query = (params.get("q") or "").strip()
    if not query:
        raise ValidationError("Search query is required", {"q": ["This field is required."]})

    post_filter = PostFilter.from_params(
        {"page": params.get("page"), "limit": params.get("limit")},
        search=query,
        keyword=query,
        status=Post.STATUS_PUBLISHED,
    )
    posts, pagination = paginate(
        filter_posts(post_filter, Post.objects.with_relations()), post_filter
    )
    return posts, pagination, query

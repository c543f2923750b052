"""
Post, Category, and Keyword models for django-blog-cms.
"""
from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.html import strip_tags

from ..conf import blog_settings
from ..slugs import generate_slug, generate_unique_slug


class Category(models.Model):
    """
    Flat category for organizing posts.

    Deleting a category leaves its posts uncategorized.
    """

    title = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["title"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.title)[:100]
        super().save(*args, **kwargs)

    @property
    def post_count(self):
        """Return count of published posts in this category."""
        return self.posts.filter(status=Post.STATUS_PUBLISHED).count()

    def to_dict(self):
        return {"id": self.pk, "title": self.title, "slug": self.slug}


class PostQuerySet(models.QuerySet):
    def with_relations(self):
        """Load author, category and keywords alongside the posts."""
        return self.select_related("author", "category").prefetch_related(
            "keyword_entries"
        )

    def published(self):
        return self.filter(status=Post.STATUS_PUBLISHED)

    def visible_to(self, identity):
        """
        Restrict to posts the identity may read.

        Admins see everything. Everyone else sees published posts, and
        signed-in users additionally see their own posts in any status.
        """
        if identity is not None and identity.is_admin:
            return self
        visible = Q(status=Post.STATUS_PUBLISHED)
        if identity is not None:
            visible |= Q(author_id=identity.id)
        return self.filter(visible)


class Post(models.Model):
    """
    Blog post.

    The slug is derived from the title when the post is first saved and
    is never regenerated afterwards, even if the title changes.
    """

    STATUS_DRAFT = "DRAFT"
    STATUS_PUBLISHED = "PUBLISHED"
    STATUS_ARCHIVED = "ARCHIVED"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
        (STATUS_ARCHIVED, "Archived"),
    ]

    # Content
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    content = models.TextField()
    excerpt = models.TextField(
        blank=True,
        help_text="Optional plain-text summary. Auto-generated if blank.",
    )
    thumbnail = models.URLField(max_length=500, blank=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
    )
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="posts",
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
        db_index=True,
    )

    # Engagement stats
    views = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "-created_at"], name="blog_cms_post_status_created"),
            models.Index(fields=["author", "-created_at"], name="blog_cms_post_author_created"),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.assign_slug()

        # Set created_at if not set
        if not self.created_at:
            self.created_at = timezone.now()

        super().save(*args, **kwargs)

    def assign_slug(self, taken=()):
        """
        Pick a slug for the title that no stored post uses.

        ``taken`` holds extra slugs to avoid, such as a candidate the
        database has just rejected.
        """
        base_slug = generate_slug(self.title) or blog_settings.FALLBACK_SLUG
        # Every possible collision (base or base-N) shares the base prefix
        existing = set(
            Post.objects.filter(slug__startswith=base_slug).values_list("slug", flat=True)
        )
        existing.update(taken)
        self.slug = generate_unique_slug(base_slug, existing)
        return self.slug

    @staticmethod
    def excerpt_from(content):
        """Plain-text summary of HTML content."""
        text = strip_tags(content)
        return text[:blog_settings.EXCERPT_LENGTH] + blog_settings.EXCERPT_SUFFIX

    @property
    def keywords(self):
        return [entry.value for entry in self.keyword_entries.all()]

    def set_keywords(self, values):
        """Replace the keyword list, keeping the given order."""
        self.keyword_entries.all().delete()
        Keyword.objects.bulk_create(
            Keyword(post=self, value=value, position=position)
            for position, value in enumerate(values)
        )
        # Drop any prefetched copy so the property reloads
        prefetched = getattr(self, "_prefetched_objects_cache", {})
        prefetched.pop("keyword_entries", None)

    @property
    def is_published(self):
        return self.status == self.STATUS_PUBLISHED

    def can_view(self, identity):
        """Check if identity may read this post."""
        if self.is_published:
            return True
        if identity is None:
            return False
        return identity.is_admin or identity.id == self.author_id

    def can_modify(self, identity):
        """Check if identity may edit or delete this post."""
        if identity is None:
            return False
        return identity.is_admin or identity.id == self.author_id

    def publish(self):
        self.status = self.STATUS_PUBLISHED
        self.save(update_fields=["status", "updated_at"])

    def archive(self):
        self.status = self.STATUS_ARCHIVED
        self.save(update_fields=["status", "updated_at"])

    def increment_views(self):
        """
        Increment the view counter atomically.

        Returns False if the row no longer exists.
        """
        updated = Post.objects.filter(pk=self.pk).update(views=F("views") + 1)
        if updated:
            self.refresh_from_db(fields=["views"])
        return bool(updated)

    def to_dict(self):
        return {
            "id": self.pk,
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "excerpt": self.excerpt or None,
            "thumbnail": self.thumbnail or None,
            "keywords": self.keywords,
            "status": self.status,
            "views": self.views,
            "authorId": self.author_id,
            "categoryId": self.category_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "author": self.author.to_summary_dict(),
            "category": self.category.to_dict() if self.category else None,
        }


class Keyword(models.Model):
    """One entry of a post's ordered keyword list."""

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="keyword_entries",
    )
    value = models.CharField(max_length=100, db_index=True)
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["position"]

    def __str__(self):
        return self.value

"""
Django admin configuration for blog_cms.

Admins moderate posts here: changing status in bulk, reviewing view
counts and reassigning categories.
"""
from django.contrib import admin
from django.utils import timezone

from .models import Category, Keyword, Post, User


class KeywordInline(admin.TabularInline):
    """Inline for editing a post's keyword list."""

    model = Keyword
    extra = 1
    fields = ["value", "position"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "post_count", "created_at"]
    search_fields = ["title", "slug"]
    prepopulated_fields = {"slug": ("title",)}


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "status",
        "category",
        "views",
        "created_at",
    ]
    list_filter = ["status", "category", "created_at"]
    search_fields = ["title", "content", "excerpt", "author__email", "author__username"]
    raw_id_fields = ["author", "category"]
    date_hierarchy = "created_at"
    inlines = [KeywordInline]
    readonly_fields = ["slug", "views", "created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "excerpt", "author")
        }),
        ("Taxonomy", {
            "fields": ("category", "thumbnail")
        }),
        ("Status", {
            "fields": ("status",)
        }),
        ("Metadata", {
            "fields": ("views", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "archive_posts", "unpublish_posts"]

    @admin.display(description="Title")
    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        for post in queryset:
            post.publish()
        self.message_user(request, f"{queryset.count()} posts published.")

    @admin.action(description="Archive selected posts")
    def archive_posts(self, request, queryset):
        for post in queryset:
            post.archive()
        self.message_user(request, f"{queryset.count()} posts archived.")

    @admin.action(description="Move selected posts back to draft")
    def unpublish_posts(self, request, queryset):
        count = queryset.update(status=Post.STATUS_DRAFT, updated_at=timezone.now())
        self.message_user(request, f"{count} posts moved to draft.")


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ["email", "username", "name", "role", "post_count", "created_at"]
    list_filter = ["role", "created_at"]
    search_fields = ["email", "username", "name"]
    readonly_fields = ["password", "last_login", "created_at", "updated_at"]
    fields = ["email", "username", "name", "image", "role", "password", "last_login", "created_at", "updated_at"]

    @admin.display(description="Posts")
    def post_count(self, obj):
        return obj.posts.count()

    def has_delete_permission(self, request, obj=None):
        # Admins may not delete their own account
        if obj is not None and obj.pk == request.user.pk:
            return False
        return super().has_delete_permission(request, obj)

    def delete_queryset(self, request, queryset):
        super().delete_queryset(request, queryset.exclude(pk=request.user.pk))

"""
Models for django-blog-cms.

All models are importable from blog_cms.models:

    from blog_cms.models import Post, Category, Keyword, User
"""
from .users import User, UserManager
from .posts import Category, Keyword, Post, PostQuerySet

__all__ = [
    # Accounts
    "User",
    "UserManager",
    # Posts
    "Category",
    "Keyword",
    "Post",
    "PostQuerySet",
]

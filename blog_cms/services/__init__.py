"""
Business operations for django-blog-cms.

Every function takes a ``RequestContext`` first and raises
``blog_cms.exceptions`` errors on failure.
"""
from . import categories, posts, users

__all__ = ["categories", "posts", "users"]

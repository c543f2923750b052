"""
Configuration settings for django-blog-cms.

Override these in your Django settings.py:

    BLOG_CMS = {
        'POSTS_PER_PAGE': 20,
        'EXCERPT_LENGTH': 200,
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Listing
    "POSTS_PER_PAGE": 10,
    "MAX_POSTS_PER_PAGE": 100,

    # Slugs
    "SLUG_MAX_LENGTH": 200,
    "FALLBACK_SLUG": "post",
    "SLUG_CREATE_ATTEMPTS": 5,

    # Post validation
    "TITLE_MAX_LENGTH": 200,
    "CONTENT_MIN_LENGTH": 10,
    "KEYWORD_MAX_LENGTH": 100,

    # Excerpts
    "EXCERPT_LENGTH": 160,
    "EXCERPT_SUFFIX": "...",

    # Accounts
    "PASSWORD_MIN_LENGTH": 6,
}


class BlogCmsSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_cms.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_cms setting: {name}")

        user_settings = getattr(settings, "BLOG_CMS", {})
        return user_settings.get(name, DEFAULTS[name])


blog_settings = BlogCmsSettings()

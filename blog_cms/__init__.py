"""
django-blog-cms - A Django content-management app for blogs.

Features:
- Posts with unique, immutable slugs and auto-generated excerpts
- Category taxonomy and per-post keyword lists
- Filtered, searchable, paginated post listings
- Atomic view counting that ignores administrators
- USER / ADMIN roles with session-based authentication
- JSON API plus Django admin moderation
"""

__version__ = "0.1.0"

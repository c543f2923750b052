"""
Slug generation for posts.
"""
import re

from django.utils.text import slugify

from .conf import blog_settings

_SEPARATOR_RUNS = re.compile(r"[-_]+")


def generate_slug(title):
    """
    Derive a URL-safe slug from a title.

    The result contains only lowercase ASCII letters, digits and single
    hyphens, and never starts or ends with a hyphen. It may be empty when
    the title has nothing usable in it.
    """
    slug = _SEPARATOR_RUNS.sub("-", slugify(title or "")).strip("-")
    return slug[:blog_settings.SLUG_MAX_LENGTH].rstrip("-")


def generate_unique_slug(base_slug, existing_slugs):
    """
    Return ``base_slug``, or ``base_slug-N`` with the smallest N >= 2 that
    is not in ``existing_slugs``.
    """
    existing = set(existing_slugs)
    if base_slug not in existing:
        return base_slug

    counter = 2
    while f"{base_slug}-{counter}" in existing:
        counter += 1
    return f"{base_slug}-{counter}"

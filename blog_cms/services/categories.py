"""
Category taxonomy.
"""
import logging

from django.db import IntegrityError, transaction

from ..exceptions import ConflictError, ValidationError
from ..forms import CategoryForm
from ..models import Category

logger = logging.getLogger(__name__)


def list_categories(ctx):
    return list(Category.objects.order_by("title", "id"))


def create_category(ctx, data):
    identity = ctx.require_admin()
    form = CategoryForm(data)
    if not form.is_valid():
        raise ValidationError.from_form(form)

    try:
        with transaction.atomic():
            category = Category.objects.create(**form.cleaned_data)
    except IntegrityError:
        raise ConflictError("Category slug already exists")

    logger.info("Admin %s created category %r", identity.id, category.slug)
    return category

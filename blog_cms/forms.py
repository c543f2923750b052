"""
Input validation for django-blog-cms.

Forms are bound to decoded JSON bodies, so field names follow the wire
format (``categoryId``, ``newPassword``) rather than Python naming.
"""
from django import forms

from .conf import blog_settings
from .models import Category, Post, User


class KeywordListField(forms.Field):
    """A JSON list of keyword strings. Blank entries are dropped."""

    default_error_messages = {
        "invalid": "Keywords must be a list of strings",
        "too_long": "Keywords may be at most %(limit)d characters",
    }

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if not isinstance(value, (list, tuple)):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        keywords = []
        for item in value:
            if not isinstance(item, str):
                raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
            item = item.strip()
            if item:
                keywords.append(item)
        return keywords

    def validate(self, value):
        super().validate(value)
        limit = blog_settings.KEYWORD_MAX_LENGTH
        if any(len(keyword) > limit for keyword in value):
            raise forms.ValidationError(
                self.error_messages["too_long"],
                code="too_long",
                params={"limit": limit},
            )


def _title_field():
    return forms.CharField(
        max_length=blog_settings.TITLE_MAX_LENGTH,
        error_messages={"required": "Title is required", "max_length": "Title too long"},
    )


def _content_field():
    return forms.CharField(
        strip=False,
        min_length=blog_settings.CONTENT_MIN_LENGTH,
        error_messages={
            "required": "Content is required",
            "min_length": "Content must be at least %(limit_value)d characters",
        },
    )


def _password_field(required, too_short):
    return forms.CharField(
        strip=False,
        min_length=blog_settings.PASSWORD_MIN_LENGTH,
        error_messages={"required": required, "min_length": too_short},
    )


class PostCreateForm(forms.Form):
    title = _title_field()
    content = _content_field()
    excerpt = forms.CharField(required=False)
    keywords = KeywordListField(required=False)
    categoryId = forms.ModelChoiceField(
        queryset=Category.objects.all(),
        required=False,
        error_messages={"invalid_choice": "Category not found"},
    )
    # Blank means no thumbnail
    thumbnail = forms.URLField(
        required=False,
        max_length=500,
        assume_scheme="https",
        error_messages={"invalid": "Thumbnail must be a valid URL"},
    )
    status = forms.ChoiceField(
        required=False,
        choices=[
            (Post.STATUS_DRAFT, "Draft"),
            (Post.STATUS_PUBLISHED, "Published"),
        ],
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Limits come from BLOG_CMS at bind time, not import time
        self.fields["title"] = _title_field()
        self.fields["content"] = _content_field()

    def clean_status(self):
        return self.cleaned_data["status"] or Post.STATUS_DRAFT


class PostUpdateForm(PostCreateForm):
    """
    Partial update of a post.

    Only keys present in the submitted data are validated and applied;
    a present ``title``, ``content`` or ``status`` may not be blank.
    """

    NON_BLANK_FIELDS = ("title", "content", "status")

    status = forms.ChoiceField(required=False, choices=Post.STATUS_CHOICES)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False

    def clean_status(self):
        return self.cleaned_data["status"]

    def clean(self):
        cleaned_data = super().clean()
        for name in self.NON_BLANK_FIELDS:
            if name in self.data and name not in self.errors and not cleaned_data.get(name):
                self.add_error(name, f"{name.capitalize()} is required")
        return cleaned_data

    @property
    def changes(self):
        """Cleaned values for the fields that were submitted."""
        return {
            name: self.cleaned_data[name]
            for name in self.fields
            if name in self.data and name in self.cleaned_data
        }


class CategoryForm(forms.Form):
    title = forms.CharField(
        max_length=100,
        error_messages={"required": "Title and slug are required"},
    )
    slug = forms.SlugField(
        max_length=100,
        error_messages={"required": "Title and slug are required"},
    )


class ProfileForm(forms.Form):
    name = forms.CharField(max_length=150)
    email = forms.EmailField(max_length=254)
    username = forms.CharField(max_length=50)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.error_messages["required"] = "Name, email, and username are required"

    def clean_email(self):
        return User.objects.normalize_email(self.cleaned_data["email"])


class RegistrationForm(forms.Form):
    PASSWORD_MESSAGES = (
        "Password is required",
        "Password must be at least %(limit_value)d characters long",
    )

    name = forms.CharField(max_length=150, required=False)
    email = forms.EmailField(max_length=254, error_messages={"required": "Email is required"})
    username = forms.CharField(max_length=50, required=False)
    password = _password_field(*PASSWORD_MESSAGES)
    role = forms.ChoiceField(required=False, choices=User.ROLE_CHOICES)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["password"] = _password_field(*self.PASSWORD_MESSAGES)

    def clean_email(self):
        return User.objects.normalize_email(self.cleaned_data["email"])


class PasswordChangeForm(forms.Form):
    PASSWORD_MESSAGES = (
        "New password is required",
        "New password must be at least %(limit_value)d characters long",
    )

    currentPassword = forms.CharField(
        strip=False,
        error_messages={"required": "Current password is required"},
    )
    newPassword = _password_field(*PASSWORD_MESSAGES)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["newPassword"] = _password_field(*self.PASSWORD_MESSAGES)


class RoleForm(forms.Form):
    userId = forms.IntegerField(error_messages={"required": "userId is required"})
    role = forms.ChoiceField(
        choices=User.ROLE_CHOICES,
        error_messages={"required": "role is required", "invalid_choice": "Invalid role"},
    )

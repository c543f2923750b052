"""
URL configuration for django-blog-cms.

Include in your project urls.py:

    path('api/v1/', include('blog_cms.urls')),

and optionally point CSRF failures at the JSON handler:

    CSRF_FAILURE_VIEW = "blog_cms.views.csrf_failure"
"""
from django.urls import path

from . import views

app_name = "blog_cms"

urlpatterns = [
    # Posts
    path("posts/", views.PostCollectionView.as_view(), name="post_list"),
    path("posts/<slug:slug>/", views.PostDetailView.as_view(), name="post_detail"),
    path("search/", views.SearchView.as_view(), name="search"),

    # Categories
    path("categories/", views.CategoryCollectionView.as_view(), name="category_list"),

    # Users
    path("users/", views.UserCollectionView.as_view(), name="user_list"),
    path("users/profile/", views.ProfileView.as_view(), name="user_profile"),
    path("users/password/", views.PasswordView.as_view(), name="user_password"),
    path("register/", views.RegisterView.as_view(), name="register"),

    # Session
    path("auth/login/", views.LoginView.as_view(), name="login"),
    path("auth/logout/", views.LogoutView.as_view(), name="logout"),
    path("auth/session/", views.SessionView.as_view(), name="session"),
]

"""URL configuration for django-restrict-branch.

Example usage in project urls.py:

    urlpatterns = [
        path("admin/pages/", include("django_restrict_branch.urls")),
    ]
"""

from django.urls import path

from .views import PageListView

app_name = "restrict_branch"

urlpatterns = [
    path("", PageListView.as_view(), name="page-list"),
]

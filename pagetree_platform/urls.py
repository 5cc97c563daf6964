"""URL configuration for pagetree_platform project."""

from django.contrib import admin
from django.urls import path

from apps.pages.api import api as pages_api

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/pages/", pages_api.urls),
]

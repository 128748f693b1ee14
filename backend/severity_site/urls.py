"""
Root URL configuration for the backend project.

The JSON API sits at the top level (/config, /data, /upload); anything else
is looked up in the static frontend folders.
"""
from django.urls import path, include, re_path

from core.views import frontend_asset

urlpatterns = [
    path("", include("core.urls")),
    path("", frontend_asset, {"path": "index.html"}, name="index"),
    re_path(r"^(?P<path>.+)$", frontend_asset, name="frontend-asset"),
]

handler404 = "core.exceptions.not_found"
handler500 = "core.exceptions.server_error"

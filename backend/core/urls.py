"""URL patterns for the JSON API of the `core` app."""
from django.urls import path

from .views import ConfigView, DataView, UploadView

urlpatterns = [
    path("config", ConfigView.as_view(), name="config"),
    path("data", DataView.as_view(), name="data"),
    path("upload", UploadView.as_view(), name="upload"),
]

"""
API views for the `core` app.

- /config: read / replace the severity weights,
- /data: read / replace the event payload sent by the frontend,
- /upload: store a CSV file (the retention sweep deletes it later),
- everything else: static frontend files.

Errors are not handled here: views raise and `core.exceptions` turns the
exception into a JSON response.
"""
from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.http import Http404
from django.views.static import serve
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import ValidationFailed
from .serializers import CsvUploadSerializer, first_error
from .stores import ConfigStore, DataStore
from .uploads import store_upload


class ConfigView(APIView):
    """Severity weights shown and edited in the manual input panel."""

    parser_classes = [JSONParser]

    def get(self, request, *args, **kwargs):
        return Response(ConfigStore().read(), status=status.HTTP_200_OK)

    def post(self, request, *args, **kwargs):
        # ConfigStore validates the four weights before writing anything.
        ConfigStore().write(request.data)
        return Response({"message": "Configuration saved"}, status=status.HTTP_200_OK)


class DataView(APIView):
    """Free-form JSON payload; no schema on purpose."""

    parser_classes = [JSONParser]

    def get(self, request, *args, **kwargs):
        return Response(DataStore().read(), status=status.HTTP_200_OK)

    def post(self, request, *args, **kwargs):
        DataStore().write(request.data)
        return Response({"message": "Data saved"}, status=status.HTTP_200_OK)


class UploadView(APIView):
    """Single CSV upload in the multipart field `file`."""

    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, *args, **kwargs):
        serializer = CsvUploadSerializer(data=request.data)
        if not serializer.is_valid():
            raise ValidationFailed(first_error(serializer.errors))

        stored_name = store_upload(serializer.validated_data["file"])
        return Response(
            {"message": "File uploaded successfully", "filename": stored_name},
            status=status.HTTP_200_OK,
        )


def frontend_asset(request, path):
    """
    Serve `path` from the first frontend folder that has it.

    Missing files end up in `handler404`, which answers with JSON.
    """
    for root in settings.FRONTEND_DIRS:
        root = Path(root)
        if not root.is_dir():
            continue
        try:
            return serve(request, path, document_root=root)
        except Http404:
            continue
    raise Http404(path)

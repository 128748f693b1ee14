"""Serializers used by the API views."""
from rest_framework import serializers

from .uploads import upload_problem


class CsvUploadSerializer(serializers.Serializer):
    """
    Checks the single `file` field of an upload.

    The field is optional at the DRF level so that a missing file gets our
    own "No file uploaded" message instead of DRF's generic one.
    """

    file = serializers.FileField(required=False, allow_empty_file=True)

    def validate_file(self, upload):
        problem = upload_problem(upload)
        if problem:
            raise serializers.ValidationError(problem)
        return upload

    def validate(self, attrs):
        if not attrs.get("file"):
            raise serializers.ValidationError("No file uploaded")
        return attrs


def first_error(errors) -> str:
    """Pick the first human readable message out of `serializer.errors`."""
    if isinstance(errors, dict):
        for value in errors.values():
            return first_error(value)
    if isinstance(errors, (list, tuple)) and errors:
        return first_error(errors[0])
    return str(errors)

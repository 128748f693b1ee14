#!/usr/bin/env python
"""
manage.py for the severity dashboard backend.

Standard Django entry point: `python manage.py runserver` starts the API on
$PORT (3000 by default), `python manage.py purge_uploads` runs one retention
sweep by hand.
"""
import os
import sys


def main() -> None:
    """Run administrative tasks."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "severity_site.settings")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Make sure it is installed and available "
            "on your PYTHONPATH, and that the virtual environment is activated."
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()

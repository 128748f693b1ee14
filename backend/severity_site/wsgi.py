"""
WSGI config for the backend project.

Besides exposing the application object, this is where the upload retention
sweep gets started, so it only runs inside a real server process.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "severity_site.settings")

application = get_wsgi_application()

from core.uploads import start_retention_scheduler  # noqa: E402

start_retention_scheduler()

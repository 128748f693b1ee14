"""`runserver` that listens on $PORT (3000 unless told otherwise)."""
from django.conf import settings
from django.core.management.commands.runserver import Command as RunserverCommand


class Command(RunserverCommand):
    default_port = str(settings.PORT)

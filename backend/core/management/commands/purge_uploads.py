"""Run the upload retention sweep once, e.g. from cron."""
from django.conf import settings
from django.core.management.base import BaseCommand

from core.uploads import purge_expired_uploads


class Command(BaseCommand):
    help = "Delete uploaded CSV files older than the retention window."

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=float,
            default=None,
            help="Retention window in days (defaults to UPLOAD_RETENTION_DAYS).",
        )

    def handle(self, *args, **options):
        days = options["days"] if options["days"] is not None else settings.UPLOAD_RETENTION_DAYS
        deleted = purge_expired_uploads(days)
        for name in deleted:
            self.stdout.write(f"  removed {name}")
        self.stdout.write(self.style.SUCCESS(f"Deleted {len(deleted)} file(s) older than {days:g} day(s)."))

"""
Django management command to mark expired licenses.

Celery beat runs the same job daily; this command runs it on demand.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to mark ACTIVE licenses past their expiry date as EXPIRED."""

    help = "Mark ACTIVE licenses past their expiry date as EXPIRED"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        handler = ExpireLicensesHandler(DjangoLicenseRepository())

        result = async_to_sync(handler.handle)(ExpireLicensesCommand(dry_run=dry_run))
        self.stdout.write(f"Found {result.found} expired license(s)")

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for license_id in result.license_ids[:10]:  # Show first 10
                self.stdout.write(f"  - License {license_id}")
            return

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully marked {result.expired} license(s) as expired")
        )

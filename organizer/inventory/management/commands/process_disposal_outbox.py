"""
Management command to create follow-up tasks for queued disposal outbox entries.
Used with DISPOSAL_DISPATCH=manual, or to retry entries that failed.
"""
from django.core.management.base import BaseCommand
from organizer.inventory.disposal import pending_entries, process_pending


class Command(BaseCommand):
    help = "Processes pending disposal outbox entries into follow-up tasks"

    def add_arguments(self, parser):
        parser.add_argument(
            '--retry-failed',
            action='store_true',
            help='Also retry entries whose previous attempt failed',
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=None,
            help='Maximum number of entries to process',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be processed without making changes',
        )

    def handle(self, *args, **options):
        retry_failed = options['retry_failed']
        limit = options['limit']
        dry_run = options['dry_run']

        entries = pending_entries(include_failed=retry_failed)
        count = entries.count()

        if count == 0:
            self.stdout.write(self.style.SUCCESS("No disposal outbox entries to process."))
            return

        self.stdout.write(f"Found {count} entr{'y' if count == 1 else 'ies'} to process")
        for entry in entries[:20]:
            self.stdout.write(f"  - {entry.idempotency_key} ({entry.status}, item: {entry.item_name})")
        if count > 20:
            self.stdout.write(f"  ... and {count - 20} more")

        if dry_run:
            self.stdout.write(self.style.WARNING("[DRY RUN] No tasks were created"))
            return

        processed, failed = process_pending(limit=limit, include_failed=retry_failed)
        self.stdout.write(self.style.SUCCESS(f"Processed {processed} entr{'y' if processed == 1 else 'ies'}"))
        if failed:
            self.stdout.write(self.style.ERROR(f"{failed} entr{'y' if failed == 1 else 'ies'} failed; rerun with --retry-failed"))

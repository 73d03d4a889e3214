"""
Management command to reconcile the two copies of every price entry.

Entries whose global copy is missing (for example after a failed write)
get a new global copy linked to them. Global entries whose owner's entry
is gone (for example after a failed global delete) are removed.

Usage:
    python manage.py reconcile_entries
    python manage.py reconcile_entries --dry-run
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from apps.entries.models import UserEntry, GlobalEntry

COPIED_FIELDS = (
    'user_id',
    'category',
    'product_name',
    'package_size',
    'store',
    'price',
    'date',
    'note',
)


class Command(BaseCommand):
    help = 'Recreate missing global copies of entries and delete orphaned global entries'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be changed without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        global_ids = GlobalEntry.objects.values_list('id', flat=True)
        user_entry_ids = UserEntry.objects.values_list('id', flat=True)

        unlinked = UserEntry.objects.exclude(global_entry_id__in=global_ids).order_by('date')
        orphaned = GlobalEntry.objects.exclude(user_entry_id__in=user_entry_ids).order_by('date')

        unlinked_count = unlinked.count()
        orphaned_count = orphaned.count()

        if unlinked_count == 0 and orphaned_count == 0:
            self.stdout.write(
                self.style.SUCCESS('Entries are consistent. Nothing to do.')
            )
            return

        self.stdout.write(f'\nFound {unlinked_count} entry(ies) without a global copy:\n')
        for entry in unlinked:
            self.stdout.write(
                f'  - {entry.product_name} | {entry.price} | {entry.store or "-"} | Date: {entry.date}'
            )

        self.stdout.write(f'\nFound {orphaned_count} orphaned global entry(ies):\n')
        for entry in orphaned:
            self.stdout.write(
                f'  - {entry.product_name} | {entry.price} | {entry.store or "-"} | Date: {entry.date}'
            )

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        with transaction.atomic():
            for entry in list(unlinked):
                # A global copy may exist even though the link back to it was never written
                global_entry = GlobalEntry.objects.filter(user_entry_id=entry.id).first()
                if global_entry is None:
                    global_entry = GlobalEntry.objects.create(
                        user_entry_id=entry.id,
                        **{field: getattr(entry, field) for field in COPIED_FIELDS}
                    )
                entry.global_entry_id = global_entry.id
                entry.save(update_fields=['global_entry_id'])

            deleted, _ = orphaned.delete()

        self.stdout.write(
            self.style.SUCCESS(
                f'\nRelinked {unlinked_count} entry(ies), deleted {deleted} orphaned global entry(ies).'
            )
        )

"""
Management command to import notes from a JSON export.

By default notes are merged: notes whose id already exists are skipped.
With --replace every stored note is deleted before importing.
"""

import json

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from notes.exchange import import_notes


class Command(BaseCommand):
    help = 'Import notes from a JSON export file'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            type=str,
            help='Path to the JSON export file',
        )
        parser.add_argument(
            '--replace',
            action='store_true',
            help='Delete all existing notes before importing',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be imported without making changes',
        )

    def handle(self, *args, **options):
        path = options['path']
        mode = 'replace' if options.get('replace') else 'merge'
        dry_run = options.get('dry_run')

        if dry_run:
            self.stdout.write(
                self.style.WARNING('DRY RUN MODE: No changes will be saved\n')
            )

        try:
            with open(path, encoding='utf-8') as fh:
                data = json.load(fh)
        except OSError as e:
            raise CommandError(f'Could not read {path}: {e}')
        except json.JSONDecodeError as e:
            raise CommandError(f'{path} is not valid JSON: {e}')

        try:
            with transaction.atomic():
                created = import_notes(data, mode=mode)
                if dry_run:
                    transaction.set_rollback(True)
        except ValueError as e:
            raise CommandError(str(e))

        verb = 'Would import' if dry_run else 'Imported'
        self.stdout.write(
            self.style.SUCCESS(f'{verb} {created} note(s) ({mode} mode)')
        )

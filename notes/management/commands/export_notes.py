"""
Management command to export notes as a JSON document.

The output uses the same format the notes panel imports, so it can be used
for backups or to move notes between installations.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from notes.exchange import export_notes
from notes.models import Note


class Command(BaseCommand):
    help = 'Export notes as JSON'

    def add_arguments(self, parser):
        parser.add_argument(
            '--output',
            type=str,
            help='Write the export to this file instead of stdout',
        )
        parser.add_argument(
            '--search',
            type=str,
            help='Only export notes whose title or content matches',
        )

    def handle(self, *args, **options):
        output = options.get('output')
        search = options.get('search')

        document = export_notes(Note.objects.search(search))
        payload = json.dumps(document, indent=2, ensure_ascii=False)

        if not output:
            self.stdout.write(payload)
            return

        try:
            with open(output, 'w', encoding='utf-8') as fh:
                fh.write(payload)
        except OSError as e:
            raise CommandError(f'Could not write {output}: {e}')

        self.stdout.write(
            self.style.SUCCESS(f"Exported {document['notesCount']} note(s) to {output}")
        )

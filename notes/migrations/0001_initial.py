from django.db import migrations, models

import notes.models.note


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Note",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("is_deleted", models.BooleanField(db_index=True, default=False)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                (
                    "uid",
                    models.CharField(
                        default=notes.models.note.generate_note_uid,
                        help_text="Stable identifier, kept across export and import",
                        max_length=64,
                        unique=True,
                    ),
                ),
                (
                    "title",
                    models.CharField(
                        blank=True,
                        help_text="Optional title shown in the notes list",
                        max_length=200,
                    ),
                ),
                ("content", models.TextField(blank=True, help_text="Note markup")),
                (
                    "content_html",
                    models.TextField(
                        blank=True,
                        editable=False,
                        help_text="Rendered preview HTML (auto-generated from content)",
                    ),
                ),
            ],
            options={
                "verbose_name": "Note",
                "verbose_name_plural": "Notes",
                "ordering": ["-updated_at"],
            },
        ),
    ]

"""
Note model for the quick notes panel.

The markup text in ``content`` is the only source of truth. The preview HTML
is re-rendered on every save and the editable block tree is built on demand.
"""

import secrets

from django.db import models
from django.db.models import Q

from notes.markup import parse_for_editor, render_preview
from notes.utils import count_words

from .base import SoftDeleteManager, SoftDeleteModel, SoftDeleteQuerySet, TimeStampedModel


def generate_note_uid():
    """Short random identifier used in exports and API URLs."""
    return secrets.token_hex(8)


class NoteQuerySet(SoftDeleteQuerySet):
    def search(self, query):
        """Case-insensitive match on title or markup content."""
        query = (query or "").strip()
        if not query:
            return self
        return self.filter(Q(title__icontains=query) | Q(content__icontains=query))


class NoteManager(SoftDeleteManager):
    def get_queryset(self):
        return NoteQuerySet(self.model, using=self._db).alive()

    def search(self, query):
        return self.get_queryset().search(query)


class Note(TimeStampedModel, SoftDeleteModel):
    """A quick note written in note markup."""

    uid = models.CharField(
        max_length=64,
        unique=True,
        default=generate_note_uid,
        help_text="Stable identifier, kept across export and import",
    )
    title = models.CharField(
        max_length=200,
        blank=True,
        help_text="Optional title shown in the notes list",
    )
    content = models.TextField(
        blank=True,
        help_text="Note markup",
    )
    content_html = models.TextField(
        blank=True,
        editable=False,
        help_text="Rendered preview HTML (auto-generated from content)",
    )

    objects = NoteManager()
    all_objects = NoteQuerySet.as_manager()

    class Meta:
        ordering = ["-updated_at"]
        verbose_name = "Note"
        verbose_name_plural = "Notes"

    def __str__(self):
        return self.title or f"Note {self.uid}"

    def save(self, *args, **kwargs):
        update_fields = kwargs.get("update_fields")
        if update_fields is None or "content" in update_fields:
            self.content_html = render_preview(self.content) if self.content else ""
            if update_fields is not None:
                kwargs["update_fields"] = list(update_fields) + ["content_html"]
        super().save(*args, **kwargs)

    @property
    def word_count(self):
        return count_words(self.content)

    def blocks(self):
        """Editable block tree for the note's markup."""
        return parse_for_editor(self.content)

"""
Models for the notes app.

- base: Base models and mixins (TimeStampedModel, SoftDeleteModel)
- note: Quick notes stored as note markup
"""

from .base import (
    SoftDeleteManager,
    SoftDeleteModel,
    SoftDeleteQuerySet,
    TimeStampedModel,
)
from .note import Note, NoteManager, NoteQuerySet, generate_note_uid

__all__ = [
    # Base
    "TimeStampedModel",
    "SoftDeleteModel",
    "SoftDeleteQuerySet",
    "SoftDeleteManager",
    # Notes
    "Note",
    "NoteQuerySet",
    "NoteManager",
    "generate_note_uid",
]

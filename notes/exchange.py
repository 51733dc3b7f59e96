"""
Export and import of notes as JSON.

Export format (version 1.0):
    {
        "version": "1.0",
        "exportedAt": 1718000000000,            // milliseconds since epoch
        "exportedAtFormatted": "2024-06-10 06:13:20 UTC",
        "notesCount": 2,
        "notes": [
            {"id": "...", "title": "...", "content": "<markup>",
             "createdAt": 1717000000000, "updatedAt": 1717000000000}
        ]
    }

Imports either merge (notes whose id already exists are skipped) or replace
every stored note.
"""

import logging
from datetime import datetime, timezone as dt_timezone

from django.db import transaction
from django.utils import timezone

from notes.models import Note, generate_note_uid

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
IMPORT_MODES = ("merge", "replace")


def _to_millis(value):
    return int(value.timestamp() * 1000) if value else None


def _from_millis(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=dt_timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def note_to_export(note):
    return {
        "id": note.uid,
        "title": note.title,
        "content": note.content,
        "createdAt": _to_millis(note.created_at),
        "updatedAt": _to_millis(note.updated_at),
    }


def export_notes(queryset=None):
    """
    Build the export document for the given notes (all live notes by default).
    """
    notes = list(queryset if queryset is not None else Note.objects.all())
    now = timezone.now()
    return {
        "version": EXPORT_VERSION,
        "exportedAt": _to_millis(now),
        "exportedAtFormatted": now.strftime("%Y-%m-%d %H:%M:%S %Z"),
        "notesCount": len(notes),
        "notes": [note_to_export(note) for note in notes],
    }


def _validate(data):
    if not isinstance(data, dict) or not isinstance(data.get("notes"), list):
        raise ValueError("Invalid notes file: expected an object with a 'notes' list")
    for index, item in enumerate(data["notes"]):
        if not isinstance(item, dict):
            raise ValueError(f"Invalid note at position {index}: expected an object")
        for key in ("title", "content"):
            if item.get(key) is not None and not isinstance(item[key], str):
                raise ValueError(f"Invalid note at position {index}: '{key}' must be a string")
    return data["notes"]


def import_notes(data, mode="merge"):
    """
    Import notes from an export document.

    Args:
        data: Parsed export document
        mode: "merge" keeps existing notes and skips known ids;
            "replace" deletes every stored note first

    Returns:
        Number of notes created

    Raises:
        ValueError: If the document or mode is invalid
    """
    if mode not in IMPORT_MODES:
        raise ValueError(f"Unknown import mode: {mode!r}")

    items = _validate(data)

    with transaction.atomic():
        if mode == "replace":
            deleted, _ = Note.all_objects.all().delete()
            logger.info(f"Replacing notes: removed {deleted} existing note(s)")
            seen = set()
        else:
            seen = set(Note.all_objects.values_list("uid", flat=True))

        created = 0
        for item in items:
            uid = str(item.get("id") or generate_note_uid())[:64]
            if uid in seen:
                logger.debug(f"Skipping note {uid}: already exists")
                continue
            seen.add(uid)

            note = Note(uid=uid, title=(item.get("title") or "")[:200], content=item.get("content") or "")
            note.save()

            timestamps = {}
            created_at = _from_millis(item.get("createdAt"))
            updated_at = _from_millis(item.get("updatedAt"))
            if created_at:
                timestamps["created_at"] = created_at
            if updated_at:
                timestamps["updated_at"] = updated_at
            if timestamps:
                # auto_now fields ignore assigned values on save()
                Note.all_objects.filter(pk=note.pk).update(**timestamps)

            created += 1

    logger.info(f"Imported {created} note(s) in {mode} mode")
    return created

import pytest
from django.urls import reverse

from notes.models import Note

pytestmark = pytest.mark.django_db


def test_changelist_lists_soft_deleted_notes(admin_client):
    Note.objects.create(title="Visible", content="x")
    Note.objects.create(title="Trashed", content="y").delete()
    response = admin_client.get(reverse("admin:notes_note_changelist"))
    assert response.status_code == 200
    assert b"Visible" in response.content
    assert b"Trashed" in response.content


def test_change_form_shows_preview(admin_client):
    note = Note.objects.create(title="Preview me", content="**bold**")
    response = admin_client.get(reverse("admin:notes_note_change", args=[note.pk]))
    assert response.status_code == 200
    assert b"<strong>bold</strong>" in response.content


def test_soft_delete_and_restore_actions(admin_client):
    note = Note.objects.create(title="Target", content="x")
    url = reverse("admin:notes_note_changelist")

    admin_client.post(url, {"action": "soft_delete_selected", "_selected_action": [note.pk]})
    assert Note.all_objects.get(pk=note.pk).is_deleted

    admin_client.post(url, {"action": "restore_selected", "_selected_action": [note.pk]})
    restored = Note.all_objects.get(pk=note.pk)
    assert not restored.is_deleted
    assert restored.deleted_at is None

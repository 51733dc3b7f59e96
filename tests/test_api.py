import json

import pytest
from django.urls import reverse

from notes.models import Note

pytestmark = pytest.mark.django_db


def post_json(client, name, payload, **extra):
    return client.post(reverse(name), data=json.dumps(payload), content_type="application/json", **extra)


class TestAuth:
    def test_anonymous_request_is_rejected(self, client):
        response = post_json(client, "api:markup-preview", {"text": "x"})
        assert response.status_code == 401

    def test_non_staff_user_is_forbidden(self, client, django_user_model):
        user = django_user_model.objects.create_user(username="reader", password="pw")
        client.force_login(user)
        response = post_json(client, "api:markup-preview", {"text": "x"})
        assert response.status_code == 403

    def test_bearer_token(self, client, settings, django_user_model):
        settings.NOTES_API_TOKEN = "s3cret"
        django_user_model.objects.create_user(username="staff", password="pw", is_staff=True)
        response = post_json(
            client, "api:markup-preview", {"text": "**x**"}, HTTP_AUTHORIZATION="Bearer s3cret"
        )
        assert response.status_code == 200

    def test_wrong_token(self, client, settings, admin_user):
        settings.NOTES_API_TOKEN = "s3cret"
        response = post_json(
            client, "api:markup-preview", {"text": "x"}, HTTP_AUTHORIZATION="Bearer nope"
        )
        assert response.status_code == 401


class TestMarkupEndpoints:
    def test_preview(self, admin_client):
        response = post_json(admin_client, "api:markup-preview", {"text": "**x**"})
        assert response.status_code == 200
        assert response.json() == {"html": "<strong>x</strong>"}

    def test_preview_requires_post(self, admin_client):
        assert admin_client.get(reverse("api:markup-preview")).status_code == 405

    def test_invalid_json(self, admin_client):
        response = admin_client.post(
            reverse("api:markup-preview"), data="{oops", content_type="application/json"
        )
        assert response.status_code == 400

    def test_non_string_text(self, admin_client):
        response = post_json(admin_client, "api:markup-preview", {"text": 5})
        assert response.status_code == 400

    def test_editor(self, admin_client):
        response = post_json(admin_client, "api:markup-editor", {"text": "- [x] done\n  - sub"})
        data = response.json()
        assert data["blocks"] == [
            {"kind": "checkbox", "content": "done", "checked": True},
            {"kind": "bullet", "content": "sub", "indent": 1},
        ]
        assert 'class="note-checkbox checked"' in data["html"]

    def test_serialize_html(self, admin_client):
        html = '<div class="note-bullet" data-indent="1">• <strong>x</strong></div>'
        response = post_json(admin_client, "api:markup-serialize", {"html": html})
        assert response.json() == {"text": "  - **x**"}

    def test_serialize_blocks(self, admin_client):
        blocks = [
            {"kind": "numbered", "content": "first", "number": "1"},
            {"kind": "table", "header": ["A"], "rows": [["1"]]},
        ]
        response = post_json(admin_client, "api:markup-serialize", {"blocks": blocks})
        assert response.json() == {"text": "1. first\n| A |\n| --- |\n| 1 |"}

    def test_serialize_bad_blocks(self, admin_client):
        response = post_json(admin_client, "api:markup-serialize", {"blocks": [{"kind": "video"}]})
        assert response.status_code == 400
        response = post_json(admin_client, "api:markup-serialize", {"blocks": "nope"})
        assert response.status_code == 400

    def test_formats(self, admin_client):
        text = "The **bold _italic_ text** here"
        cursor = text.index("italic") + 2
        response = post_json(
            admin_client,
            "api:markup-formats",
            {"text": text, "selection_start": cursor, "selection_end": cursor},
        )
        data = response.json()
        assert data["bold"] is True
        assert data["italic"] is True
        assert data["justify-center"] is False

    def test_formats_bad_offset(self, admin_client):
        response = post_json(admin_client, "api:markup-formats", {"text": "x", "selection_start": "a"})
        assert response.status_code == 400

    def test_apply(self, admin_client):
        response = post_json(
            admin_client,
            "api:markup-apply",
            {"text": "hello world", "selection_start": 0, "selection_end": 5, "format": "bold"},
        )
        data = response.json()
        assert data["text"] == "**hello** world"
        assert (data["selection_start"], data["selection_end"]) == (2, 7)
        assert data["formats"]["bold"] is True

    def test_apply_unknown_format(self, admin_client):
        response = post_json(
            admin_client, "api:markup-apply", {"text": "x", "selection_start": 0, "format": "blink"}
        )
        assert response.status_code == 400


class TestNoteEndpoints:
    def test_create_and_list(self, admin_client):
        response = post_json(admin_client, "api:notes", {"title": "Todo", "content": "- [ ] a"})
        assert response.status_code == 201
        created = response.json()
        assert created["title"] == "Todo"
        assert created["word_count"] == 4

        listing = admin_client.get(reverse("api:notes")).json()
        assert listing["count"] == 1
        assert listing["notes"][0]["id"] == created["id"]

    def test_create_from_editor_html(self, admin_client):
        html = '<div><strong>bold</strong></div><div class="note-bullet">• item</div>'
        response = post_json(admin_client, "api:notes", {"html": html})
        assert response.json()["content"] == "**bold**\n- item"

    def test_title_too_long(self, admin_client):
        response = post_json(admin_client, "api:notes", {"title": "x" * 201})
        assert response.status_code == 400

    def test_search(self, admin_client):
        Note.objects.create(title="alpha", content="x")
        Note.objects.create(title="beta", content="y")
        listing = admin_client.get(reverse("api:notes"), {"q": "alp"}).json()
        assert [note["title"] for note in listing["notes"]] == ["alpha"]

    def test_detail(self, admin_client):
        note = Note.objects.create(title="T", content="_x_")
        data = admin_client.get(reverse("api:note-detail", args=[note.uid])).json()
        assert data["content_html"] == "<em>x</em>"

    def test_patch_updates_only_given_fields(self, admin_client):
        note = Note.objects.create(title="Keep", content="old")
        response = admin_client.patch(
            reverse("api:note-detail", args=[note.uid]),
            data=json.dumps({"content": "**new**"}),
            content_type="application/json",
        )
        assert response.status_code == 200
        note.refresh_from_db()
        assert note.title == "Keep"
        assert note.content_html == "<strong>new</strong>"

    def test_put_replaces_fields(self, admin_client):
        note = Note.objects.create(title="Old", content="old")
        admin_client.put(
            reverse("api:note-detail", args=[note.uid]),
            data=json.dumps({"content": "new"}),
            content_type="application/json",
        )
        note.refresh_from_db()
        assert note.title == ""
        assert note.content == "new"

    def test_delete_is_soft(self, admin_client):
        note = Note.objects.create(content="x")
        response = admin_client.delete(reverse("api:note-detail", args=[note.uid]))
        assert response.json() == {"id": note.uid, "deleted": True}
        assert Note.all_objects.get(pk=note.pk).is_deleted
        assert admin_client.get(reverse("api:note-detail", args=[note.uid])).status_code == 404

    def test_missing_note(self, admin_client):
        assert admin_client.get(reverse("api:note-detail", args=["nope"])).status_code == 404

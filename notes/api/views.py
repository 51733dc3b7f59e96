"""
API views for the notes panel.

Endpoints:
- POST /api/v1/markup/preview/    - Render markup as read-only preview HTML
- POST /api/v1/markup/editor/     - Parse markup into editor blocks and HTML
- POST /api/v1/markup/serialize/  - Turn editor HTML or blocks back into markup
- POST /api/v1/markup/formats/    - Active formats at a cursor/selection
- POST /api/v1/markup/apply/      - Apply a toolbar format
- GET/POST /api/v1/notes/         - List (optionally ?q=) or create notes
- GET/PATCH/PUT/DELETE /api/v1/notes/{uid}/ - Read, update or delete a note
"""

import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from notes.markup import (
    NoteTextEngine,
    block_from_dict,
    block_to_dict,
)
from notes.models import Note

from .auth import api_auth_required

logger = logging.getLogger(__name__)

engine = NoteTextEngine()


def _load_json(request):
    """Return the request body as a dict, or None if it is not a JSON object."""
    try:
        data = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _text_field(data, name):
    value = data.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def _offset_field(data, name, default=0):
    value = data.get(name, default)
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer")


def note_to_dict(note):
    return {
        "id": note.uid,
        "title": note.title,
        "content": note.content,
        "content_html": note.content_html,
        "word_count": note.word_count,
        "created_at": note.created_at.isoformat() if note.created_at else None,
        "updated_at": note.updated_at.isoformat() if note.updated_at else None,
    }


# --------------------------
# Markup endpoints
# --------------------------
@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def markup_preview(request):
    """
    Request body: {"text": "<markup>"}
    Response: {"html": "<preview html>"}
    """
    data = _load_json(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    try:
        text = _text_field(data, "text")
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    return JsonResponse({"html": engine.render_preview(text)})


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def markup_editor(request):
    """
    Request body: {"text": "<markup>"}
    Response: {"blocks": [{"kind": "paragraph", ...}, ...], "html": "<editor html>"}
    """
    data = _load_json(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    try:
        text = _text_field(data, "text")
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    blocks = engine.parse_for_editor(text)
    return JsonResponse(
        {
            "blocks": [block_to_dict(block) for block in blocks],
            "html": engine.blocks_to_html(blocks),
        }
    )


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def markup_serialize(request):
    """
    Request body: {"html": "<editor html>"} or {"blocks": [...]}
    Response: {"text": "<markup>"}
    """
    data = _load_json(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON"}, status=400)

    if "blocks" in data:
        raw_blocks = data["blocks"]
        if not isinstance(raw_blocks, list) or not all(isinstance(b, dict) for b in raw_blocks):
            return JsonResponse({"error": "blocks must be a list of objects"}, status=400)
        try:
            blocks = [block_from_dict(item) for item in raw_blocks]
        except ValueError as e:
            return JsonResponse({"error": str(e)}, status=400)
        return JsonResponse({"text": engine.serialize(blocks)})

    try:
        html = _text_field(data, "html")
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)
    return JsonResponse({"text": engine.html_to_markup(html)})


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def markup_formats(request):
    """
    Request body: {"text": "...", "selection_start": 4, "selection_end": 4}
    Response: {"bold": true, "italic": false, ..., "color": null}
    """
    data = _load_json(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    try:
        text = _text_field(data, "text")
        start = _offset_field(data, "selection_start")
        end = _offset_field(data, "selection_end", start)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    return JsonResponse(engine.detect_active_formats(text, start, end).as_dict())


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def markup_apply(request):
    """
    Request body:
    {
        "text": "...",
        "selection_start": 0,
        "selection_end": 5,
        "format": "bold",
        "url": "https://...",   // link only
        "color": "red"          // color only
    }

    Response: {"text": "...", "selection_start": 2, "selection_end": 7, "formats": {...}}
    """
    data = _load_json(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    try:
        text = _text_field(data, "text")
        start = _offset_field(data, "selection_start")
        end = _offset_field(data, "selection_end", start)
        fmt = _text_field(data, "format")
        edit = engine.apply_format(
            text,
            start,
            end,
            fmt,
            url=data.get("url"),
            color=data.get("color"),
        )
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    formats = engine.detect_active_formats(edit.text, edit.selection_start, edit.selection_end)
    return JsonResponse(
        {
            "text": edit.text,
            "selection_start": edit.selection_start,
            "selection_end": edit.selection_end,
            "formats": formats.as_dict(),
        }
    )


# --------------------------
# Notes endpoints
# --------------------------
def _note_content(data):
    """Markup from the payload: ``content`` as markup, or ``html`` from the editor."""
    if "html" in data:
        return engine.html_to_markup(_text_field(data, "html"))
    return _text_field(data, "content")


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_auth_required
def notes_collection(request):
    if request.method == "GET":
        notes = Note.objects.search(request.GET.get("q"))
        payload = [note_to_dict(note) for note in notes]
        return JsonResponse({"count": len(payload), "notes": payload})

    data = _load_json(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    try:
        title = _text_field(data, "title")
        content = _note_content(data)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    if len(title) > 200:
        return JsonResponse({"error": "title must be at most 200 characters"}, status=400)

    note = Note.objects.create(title=title, content=content)
    logger.info(f"Created note {note.uid}")
    return JsonResponse(note_to_dict(note), status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH", "PUT", "DELETE"])
@api_auth_required
def note_detail(request, uid):
    try:
        note = Note.objects.get(uid=uid)
    except Note.DoesNotExist:
        return JsonResponse({"error": "Note not found"}, status=404)

    if request.method == "GET":
        return JsonResponse(note_to_dict(note))

    if request.method == "DELETE":
        note.delete()
        logger.info(f"Deleted note {note.uid}")
        return JsonResponse({"id": note.uid, "deleted": True})

    data = _load_json(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    try:
        if "title" in data or request.method == "PUT":
            note.title = _text_field(data, "title")
        if "content" in data or "html" in data or request.method == "PUT":
            note.content = _note_content(data)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    if len(note.title) > 200:
        return JsonResponse({"error": "title must be at most 200 characters"}, status=400)

    note.save()
    logger.info(f"Updated note {note.uid}")
    return JsonResponse(note_to_dict(note))

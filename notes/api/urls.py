"""
URL patterns for the notes API.

Endpoints:
- POST /api/v1/markup/preview/
- POST /api/v1/markup/editor/
- POST /api/v1/markup/serialize/
- POST /api/v1/markup/formats/
- POST /api/v1/markup/apply/
- GET/POST /api/v1/notes/
- GET/PATCH/PUT/DELETE /api/v1/notes/<uid>/
"""

from django.urls import path

from .views import (
    markup_apply,
    markup_editor,
    markup_formats,
    markup_preview,
    markup_serialize,
    note_detail,
    notes_collection,
)

app_name = "api"

urlpatterns = [
    path("v1/markup/preview/", markup_preview, name="markup-preview"),
    path("v1/markup/editor/", markup_editor, name="markup-editor"),
    path("v1/markup/serialize/", markup_serialize, name="markup-serialize"),
    path("v1/markup/formats/", markup_formats, name="markup-formats"),
    path("v1/markup/apply/", markup_apply, name="markup-apply"),
    path("v1/notes/", notes_collection, name="notes"),
    path("v1/notes/<str:uid>/", note_detail, name="note-detail"),
]

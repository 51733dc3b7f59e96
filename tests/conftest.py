import pytest

from notes.markup import NoteTextEngine


@pytest.fixture
def engine():
    return NoteTextEngine()


@pytest.fixture
def markup_settings(settings):
    """Return a setter that overrides individual NOTES_MARKUP keys for one test."""

    def _set(**overrides):
        settings.NOTES_MARKUP = {**settings.NOTES_MARKUP, **overrides}

    return _set

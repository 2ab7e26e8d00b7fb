"""
Daybook Backend — Note Service
================================

Notes have no natural time field of their own; the owner's list comes back
in insertion order, i.e. by created_at.
"""

from app.models.note import Note
from app.services.store import ResourceService
from app.validation import validate_note


class NoteService(ResourceService[Note]):
    model = Note
    resource = "note"
    validator = staticmethod(validate_note)

    def ordering(self):
        return (Note.created_at.asc(),)


note_service = NoteService()

"""
Daybook Backend — Event Service
=================================

Lists are ordered by date_time, earliest first.
"""

from app.models.event import Event
from app.services.store import ResourceService
from app.validation import validate_event


class EventService(ResourceService[Event]):
    model = Event
    resource = "event"
    validator = staticmethod(validate_event)

    def ordering(self):
        return (Event.date_time.asc(), Event.id)


event_service = EventService()

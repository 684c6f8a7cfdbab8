import logging
from datetime import datetime, timedelta, timezone

from firebase_admin import firestore

from finalmeme.models.event import EventType


class EventPublisher:
    """
    Broadcasts post activity to connected clients.

    Each emit appends a document to the 'events' collection; clients hold a
    Firestore snapshot listener on it and re-fetch what they show. Emission
    is best effort: a failure is logged and never reaches the request.

    Every event carries `expire_at`. A Firestore TTL policy on that field
    deletes old events, so the collection does not grow without bound.
    """

    def __init__(self, db=None, ttl: timedelta = timedelta(hours=24)):
        self.db = db if db is not None else firestore.client()
        self.events_ref = self.db.collection('events')
        self.ttl = ttl

    def emit(self, event_type: EventType) -> None:
        try:
            self.events_ref.add({
                'type': event_type.value,
                'created_at': firestore.SERVER_TIMESTAMP,
                'expire_at': datetime.now(timezone.utc) + self.ttl
            })
            logging.info(f"{event_type.value} event emitted")
        except Exception as e:
            logging.error(f"Failed to emit {event_type.value} event: {e}", exc_info=True)

# finalmeme/services/test_event_service.py
import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from firebase_admin import firestore

from finalmeme.models.event import EventType
from finalmeme.services.event_service import EventPublisher


def test_emit_appends_the_event_type():
    db = MagicMock()
    publisher = EventPublisher(db)

    publisher.emit(EventType.POST_CREATED)

    db.collection.assert_called_once_with('events')
    event = db.collection.return_value.add.call_args[0][0]
    assert event['type'] == 'postCreated'
    assert event['created_at'] is firestore.SERVER_TIMESTAMP


def test_events_expire_after_the_ttl():
    db = MagicMock()
    publisher = EventPublisher(db, ttl=timedelta(hours=2))

    before = datetime.now(timezone.utc)
    publisher.emit(EventType.UPDATE_POST)
    after = datetime.now(timezone.utc)

    expire_at = db.collection.return_value.add.call_args[0][0]['expire_at']
    assert before + timedelta(hours=2) <= expire_at <= after + timedelta(hours=2)


def test_emit_failure_is_logged_and_swallowed(caplog):
    db = MagicMock()
    db.collection.return_value.add.side_effect = RuntimeError('offline')
    publisher = EventPublisher(db)

    with caplog.at_level(logging.ERROR):
        publisher.emit(EventType.POST_DELETED)

    assert 'Failed to emit postDeleted event: offline' in caplog.text


def test_event_names():
    assert [event.value for event in EventType] == ['postCreated', 'postDeleted', 'updatePost']

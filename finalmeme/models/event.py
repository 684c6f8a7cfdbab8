# finalmeme/models/event.py
from enum import Enum


class EventType(Enum):
    """Post activity pushed to connected clients. Events carry no payload."""
    POST_CREATED = "postCreated"
    POST_DELETED = "postDeleted"
    UPDATE_POST = "updatePost"

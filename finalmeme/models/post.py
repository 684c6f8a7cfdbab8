# finalmeme/models/post.py
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Comment:
    """Embedded in Post.comments; has no id of its own."""
    comment: str
    owner: str  # user id


@dataclass
class Post:
    """
    Shape of a document in the Firestore 'posts' collection.
    `owner` always comes from the authenticated caller.
    """
    description: str
    image: Dict[str, Any]
    flair: str
    owner: str
    comments: List[Dict[str, Any]] = field(default_factory=list)

# finalmeme/models/user.py
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class User:
    """
    Shape of a document in the Firestore 'users' collection.
    The document id is assigned by the repository on create.
    """
    user_name: str
    email: str
    passwd: str  # werkzeug hash, never the plaintext
    avatar: Dict[str, Any]
    created_post: List[str] = field(default_factory=list)   # post ids
    favorite_post: List[str] = field(default_factory=list)  # post ids, no duplicates

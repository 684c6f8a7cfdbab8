# finalmeme/models/image.py
from dataclasses import dataclass


@dataclass
class Image:
    """Uploaded image reference embedded in users (avatar) and posts."""
    url_original: str
    url: str
    mimetype: str
    size: int

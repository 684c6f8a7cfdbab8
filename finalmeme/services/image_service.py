# finalmeme/services/image_service.py
import logging
import os
import uuid
from dataclasses import asdict
from typing import Any, Dict, Optional, Tuple

from PIL import Image as PILImage, ImageOps, UnidentifiedImageError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from finalmeme.core.errors import HttpError
from finalmeme.models.image import Image

# Avatars are cropped square from the top, post images only shrink to fit.
PRESETS = {
    'register': {'size': (300, 300), 'fit': 'cover', 'quality': 100},
    'post': {'size': (600, 600), 'fit': 'inside', 'quality': 90},
}


class ImageService:
    """
    Turns an uploaded file into an Image reference:
    stage it on disk, convert it to WebP (GIFs are kept as they are),
    upload the result to Firebase Storage.
    """

    def __init__(self, storage_service, upload_folder: str):
        self.storage_service = storage_service
        self.upload_folder = upload_folder

    def _staged_filename(self, filename: str) -> str:
        basename, extension = os.path.splitext(secure_filename(filename))
        return f"{basename or 'upload'}-{uuid.uuid4()}{extension}"

    def _optimize(self, local_path: str, preset: str) -> Tuple[str, int]:
        options = PRESETS[preset]
        target = f"{os.path.splitext(local_path)[0]}_1.webp"
        try:
            with PILImage.open(local_path) as source:
                image = source.convert('RGBA' if source.mode in ('RGBA', 'LA', 'P') else 'RGB')
                if options['fit'] == 'cover':
                    image = ImageOps.fit(image, options['size'], centering=(0.5, 0.0))
                else:
                    image = ImageOps.contain(image, options['size'])
                image.save(target, 'WEBP', quality=options['quality'])
        except (UnidentifiedImageError, OSError) as e:
            logging.error(f"Image optimization failed ({local_path}): {e}")
            # A rejected upload leaves nothing behind in the staging folder.
            for path in (local_path, target):
                if os.path.exists(path):
                    os.remove(path)
            raise HttpError(406, 'Not Acceptable', 'Not valid image file')
        return target, os.path.getsize(target)

    def save_upload(self, file: Optional[FileStorage], preset: str) -> Dict[str, Any]:
        if file is None or not file.filename:
            raise HttpError(406, 'Not Acceptable', 'Not valid image file')

        os.makedirs(self.upload_folder, exist_ok=True)
        local_path = os.path.join(self.upload_folder, self._staged_filename(file.filename))
        file.save(local_path)

        mimetype = file.mimetype
        upload_path = local_path
        size = os.path.getsize(local_path)
        if mimetype != 'image/gif':
            upload_path, size = self._optimize(local_path, preset)
            mimetype = 'image/webp'

        destination = f"public/uploads/{os.path.basename(upload_path)}"
        try:
            url = self.storage_service.upload_file(upload_path, destination, mimetype)
        finally:
            # The staged original is kept as `url_original`, the WebP copy only lives in the bucket.
            if upload_path != local_path:
                os.remove(upload_path)
        return asdict(Image(url_original=local_path, url=url, mimetype=mimetype, size=size))

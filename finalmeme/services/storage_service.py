# finalmeme/services/storage_service.py
import logging
from flask import Flask
from firebase_admin import storage


class StorageService:
    """
    Firebase Storage access. The bucket is injected through `init_app`
    once the Firebase app has been initialised.
    """

    def __init__(self, bucket=None):
        self.bucket = bucket

    def init_app(self, app: Flask):
        bucket_name = app.config.get('FIREBASE_STORAGE_BUCKET')
        if not bucket_name:
            raise ValueError("FIREBASE_STORAGE_BUCKET must be set in .env or the config class.")

        self.bucket = storage.bucket(bucket_name)
        logging.info("StorageService: Firebase Storage initialised.")

    def upload_file(self, local_path: str, destination: str, content_type: str) -> str:
        """
        Uploads a local file, makes it public and returns its public URL.

        :param local_path: file on disk to upload
        :param destination: blob path inside the bucket
        :param content_type: MIME type stored with the blob
        """
        if not self.bucket:
            raise RuntimeError("StorageService is not initialised. Call init_app first.")

        blob = self.bucket.blob(destination)
        try:
            blob.upload_from_filename(local_path, content_type=content_type)
            blob.make_public()
        except Exception as e:
            logging.error(f"Storage upload failed (destination: {destination}): {e}", exc_info=True)
            raise
        return blob.public_url

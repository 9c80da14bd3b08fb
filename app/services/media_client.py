# --------------------------------------------------
# Media Client - Cloudinary SDK integration
#
# Features:
# - Uploads of base64 data URIs (images and raw PDF reports)
# - Bulk deletion of assets by public id per resource type
# - SDK configured once from Settings, calls bounded by the request timeout
# - Failures surface as MediaClientError
# --------------------------------------------------

import base64
import logging
from functools import lru_cache
from typing import List, Optional

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import Depends

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class MediaClientError(Exception):
    pass

def to_data_uri(content: bytes, content_type: str) -> str:
    return f"data:{content_type};base64,{base64.b64encode(content).decode('ascii')}"


class MediaClient:
    def __init__(self, settings: Settings):
        self.upload_preset = settings.cloudinary_upload_preset or None
        self.timeout = settings.request_timeout
        self.configured = bool(
            settings.cloudinary_cloud_name and settings.cloudinary_api_key and settings.cloudinary_api_secret
        )
        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True
        )

    def upload(
        self,
        data_uri: str,
        folder: str,
        resource_type: str,
        public_id: Optional[str] = None,
        transformation: Optional[List[dict]] = None
    ) -> dict:
        if not self.configured:
            raise MediaClientError("Cloudinary credentials are not configured")

        options = {
            "upload_preset": self.upload_preset,
            "folder": folder,
            "resource_type": resource_type,
            "public_id": public_id,
            "transformation": transformation,
            "timeout": self.timeout,
        }

        try:
            result = cloudinary.uploader.upload(
                data_uri,
                **{key: value for key, value in options.items() if value is not None}
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload to '{folder}' failed: {e}")
            raise MediaClientError(f"Upload failed: {e}") from e

        logger.info(f"Uploaded {resource_type} asset {result.get('public_id')}")
        return result

    def delete_resources(self, public_ids: List[str], resource_type: str) -> dict:
        if not public_ids:
            return {}

        try:
            result = cloudinary.api.delete_resources(public_ids, resource_type=resource_type, timeout=self.timeout)
        except CloudinaryError as e:
            logger.error(f"Cloudinary delete of {len(public_ids)} {resource_type} assets failed: {e}")
            raise MediaClientError(f"Delete failed: {e}") from e

        logger.info(f"Deleted {len(public_ids)} {resource_type} assets")
        return dict(result)


@lru_cache
def _client_for(settings: Settings) -> MediaClient:
    return MediaClient(settings)

def get_media_client(settings: Settings = Depends(get_settings)) -> MediaClient:
    return _client_for(settings)

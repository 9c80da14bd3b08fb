"""
Upload API
========================
- POST /upload/image         : Proxies a JPG/PNG image to the media host
- POST /upload/delete-assets : Deletes uploaded images and generated reports by public id
"""

from fastapi import APIRouter, Depends, File, UploadFile
from typing import List, Optional, Tuple
from app.core.config import ALLOWED_IMAGE_TYPES
from app.core.errors import AppError, ErrorKind
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.media import AssetResponse, DeleteAssetsRequest
from app.services.media_client import MediaClient, get_media_client, to_data_uri
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Upload"])

IMAGE_TRANSFORMATION = [{"width": 1080, "height": 1080, "crop": "limit"}]

def _split_asset_ids(assets_ids: List[str]) -> Tuple[List[str], List[str]]:
    reports_ids = [i for i in assets_ids if i.startswith("reports/") and i.endswith(".pdf")]
    images_ids = [i for i in assets_ids if i not in reports_ids]
    return reports_ids, images_ids

@router.post("/image", response_model=AssetResponse)
def upload_image(
    image: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    media: MediaClient = Depends(get_media_client)
):
    if image is None:
        raise AppError(ErrorKind.validation, "Image is required")

    if not image.filename:
        raise AppError(ErrorKind.validation, "Invalid image file")

    if not image.content_type:
        raise AppError(ErrorKind.validation, "File type is missing or invalid")

    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise AppError(ErrorKind.validation, "Only JPG, JPEG, and PNG images are allowed")

    content = image.file.read()
    logger.info(f"User {current_user.id} uploading {image.content_type} image of {len(content)} bytes")

    result = media.upload(
        to_data_uri(content, image.content_type),
        folder="images",
        resource_type="image",
        transformation=IMAGE_TRANSFORMATION
    )
    return AssetResponse(public_url=result["secure_url"], public_id=result["public_id"])

@router.post("/delete-assets", response_model=MessageResponse)
def delete_assets(
    request: DeleteAssetsRequest,
    current_user: User = Depends(get_current_user),
    media: MediaClient = Depends(get_media_client)
):
    reports_ids, images_ids = _split_asset_ids(request.assets_ids)
    logger.info(f"User {current_user.id} deleting {len(reports_ids)} reports and {len(images_ids)} images")

    if reports_ids:
        media.delete_resources(reports_ids, resource_type="raw")

    if images_ids:
        media.delete_resources(images_ids, resource_type="image")

    return {"message": "Assets deleted successfully."}

"""
Upload & Report Schemas
=====================================
- DeleteAssetsRequest: Media host public ids to remove (at least one)
- GenerateReportRequest: Report form input; dates are truncated to midnight
- AssetResponse: Public URL and id of an uploaded image or report
"""

import re
from typing import List, Literal
from pydantic import Field, HttpUrl, field_validator
from app.core.config import MAX_IMAGES_COUNT
from app.schemas.base import CamelModel, UtcDatetime

CLIENT_NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")

class DeleteAssetsRequest(CamelModel):
    assets_ids: List[str]

    @field_validator("assets_ids")
    @classmethod
    def check_assets_ids(cls, value: List[str]) -> List[str]:
        cleaned = [asset_id.strip() for asset_id in value]
        if not cleaned:
            raise ValueError("At least one asset ID is required.")
        if any(not asset_id for asset_id in cleaned):
            raise ValueError("Asset cannot be empty.")
        return cleaned

class GenerateReportRequest(CamelModel):
    type: Literal["aerialsmiths"]
    date: UtcDatetime
    address: str
    client_name: str
    title: str
    date_of_service: UtcDatetime
    images: List[HttpUrl] = Field(..., min_length=1, max_length=MAX_IMAGES_COUNT)

    @field_validator("date", "date_of_service")
    @classmethod
    def truncate_to_midnight(cls, value):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)

    @field_validator("address", "title")
    @classmethod
    def check_required_text(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name.capitalize()} is required.")
        return value

    @field_validator("client_name")
    @classmethod
    def check_client_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Client name is required.")
        if not CLIENT_NAME_PATTERN.match(value):
            raise ValueError("Client name can only contain letters.")
        return value

class AssetResponse(CamelModel):
    public_url: str
    public_id: str

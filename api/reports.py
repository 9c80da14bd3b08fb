from fastapi import APIRouter, Depends
from app.core.config import Settings, get_settings
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.media import AssetResponse, GenerateReportRequest
from app.services.media_client import MediaClient, get_media_client
from app.services.pdf_renderer import PdfRenderer, get_pdf_renderer
from app.services.report_service import generate_report
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])

@router.post("/generate", response_model=AssetResponse)
def generate(
    report: GenerateReportRequest,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    renderer: PdfRenderer = Depends(get_pdf_renderer),
    media: MediaClient = Depends(get_media_client)
):
    logger.info(f"User {current_user.id} generating '{report.type}' report for {report.client_name}")
    return generate_report(report, settings.assets_dir, renderer, media)

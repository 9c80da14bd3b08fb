# --------------------------------------------------
# PDF Renderer - headless browser rendering service client
#
# Posts a fully substituted HTML document to a browserless-style
# `/pdf` endpoint and returns the rendered PDF bytes.
# --------------------------------------------------

import logging
from functools import lru_cache
from typing import Optional

import requests
from fastapi import Depends

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class RendererError(Exception):
    pass

def create_http_session(user_agent: str = "TimesheetAdmin/1.0") -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    return session


class PdfRenderer:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.base_url = settings.renderer_url.rstrip("/")
        self.token = settings.renderer_token
        self.timeout = settings.request_timeout
        self.session = session or create_http_session()

    def render(self, html: str, options: dict) -> bytes:
        params = {"token": self.token} if self.token else None
        payload = {
            "html": html,
            "options": options,
            "gotoOptions": {"waitUntil": "networkidle0"},
        }

        try:
            response = self.session.post(
                f"{self.base_url}/pdf",
                params=params,
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"PDF rendering failed: {e}")
            raise RendererError(f"Rendering failed: {e}") from e

        content_type = response.headers.get("Content-Type", "")
        if not content_type.startswith(PDF_CONTENT_TYPE):
            raise RendererError(f"Renderer returned unexpected content type '{content_type}'")

        logger.info(f"Rendered PDF of {len(response.content)} bytes")
        return response.content


@lru_cache
def _renderer_for(settings: Settings) -> PdfRenderer:
    return PdfRenderer(settings)

def get_pdf_renderer(settings: Settings = Depends(get_settings)) -> PdfRenderer:
    return _renderer_for(settings)

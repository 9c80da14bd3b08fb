# --------------------------------------------------
# Report Service - PDF report generation
#
# Flow:
# - Substitute the form values into the HTML report template
# - Embed signature and logo images as data URIs
# - Render through the headless browser service (A4, header/footer)
# - Upload the PDF as a raw asset into the "reports" folder
# --------------------------------------------------

import html
import logging
import os
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.schemas.media import GenerateReportRequest
from app.services.media_client import MediaClient, to_data_uri
from app.services.pdf_renderer import PdfRenderer, PDF_CONTENT_TYPE

logger = logging.getLogger(__name__)

TEMPLATE_PATH = os.path.join("html", "report-template.html")
SIGNATURE_IMAGES = {
    "{{LOCATOR_SIGNATURE_IMAGE}}": os.path.join("images", "locator-signature.png"),
    "{{DIRECTOR_SIGNATURE_IMAGE}}": os.path.join("images", "director-signature.png"),
}
HEADER_LOGO = os.path.join("images", "header-logo.png")
FOOTER_LOGO = os.path.join("images", "footer-logo.png")

PAGE_STYLE = (
    "padding-left: 30mm; padding-right: 30mm; padding-top: 10mm; padding-bottom: 10mm; "
    "display: flex; align-items: {align}; justify-content: space-between; width: 100%; "
    "font-family: Georgia, 'Times New Roman', Times, serif; line-height: 1.5;"
)
LOGO_STYLE = "height: 70pt; width: auto; object-fit: cover;"
IMAGE_STYLE = "width: 100%; height: auto; object-fit: cover; aspect-ratio: 1 / 1.3;"

PDF_OPTIONS = {
    "format": "A4",
    "printBackground": True,
    "displayHeaderFooter": True,
    "margin": {"top": "50mm", "left": "30mm", "bottom": "50mm", "right": "30mm"},
}


def _read_asset(assets_dir: str, relative_path: str) -> bytes:
    with open(os.path.join(assets_dir, relative_path), "rb") as f:
        return f.read()

def _png_data_uri(assets_dir: str, relative_path: str) -> str:
    return to_data_uri(_read_asset(assets_dir, relative_path), "image/png")

def format_address(address: str) -> str:
    lines = [line.strip() for line in address.strip().splitlines()]
    return "<br />".join(html.escape(line) for line in lines if line)

def format_images(images: List[str]) -> str:
    tags = []
    for index, url in enumerate(images):
        url = str(url).strip()
        if not url:
            continue
        tags.append(f'<img style="{IMAGE_STYLE}" src="{html.escape(url, quote=True)}" alt="Image {index + 1}" />')
    return "\n".join(tags)

def build_report_html(template: str, report: GenerateReportRequest, signatures: Dict[str, str]) -> str:
    replacements = {
        "{{ADDRESS}}": format_address(report.address),
        "{{CLIENT_NAME}}": html.escape(report.client_name),
        "{{TITLE}}": html.escape(report.title),
        "{{DATE_OF_SERVICE}}": report.date_of_service.strftime("%d/%m/%Y"),
        "{{IMAGES}}": format_images(report.images),
        **signatures,
    }
    content = template
    for placeholder, value in replacements.items():
        content = content.replace(placeholder, value)
    return content

def build_header(logo_uri: str, reference: int, date: datetime) -> str:
    return (
        f'<div style="{PAGE_STYLE.format(align="start")}">'
        f'<div><img style="{LOGO_STYLE}" src="{logo_uri}" alt="Header logo" /></div>'
        f'<div><p style="font-size: 10pt; color: black;">Our Ref: {reference}<br />{date.strftime("%B %Y")}</p></div>'
        "</div>"
    )

def build_footer(logo_uri: str) -> str:
    return (
        f'<div style="{PAGE_STYLE.format(align="center")}">'
        f'<div><img style="{LOGO_STYLE}" src="{logo_uri}" alt="Footer logo" /></div>'
        '<div><p style="font-size: 10pt; color: black;">'
        '<span class="pageNumber"></span>/<span class="totalPages"></span></p></div>'
        "</div>"
    )

def generate_report(
    report: GenerateReportRequest,
    assets_dir: str,
    renderer: PdfRenderer,
    media: MediaClient,
    now: Optional[datetime] = None
) -> dict:
    now = now or datetime.now(timezone.utc)
    reference = int(now.timestamp() * 1000)

    template = _read_asset(assets_dir, TEMPLATE_PATH).decode("utf-8")
    signatures = {placeholder: _png_data_uri(assets_dir, path) for placeholder, path in SIGNATURE_IMAGES.items()}
    content = build_report_html(template, report, signatures)

    options = {
        **PDF_OPTIONS,
        "headerTemplate": build_header(_png_data_uri(assets_dir, HEADER_LOGO), reference, report.date),
        "footerTemplate": build_footer(_png_data_uri(assets_dir, FOOTER_LOGO)),
    }

    logger.info(f"Rendering '{report.type}' report {reference} with {len(report.images)} images")
    pdf = renderer.render(content, options)

    result = media.upload(
        to_data_uri(pdf, PDF_CONTENT_TYPE),
        folder="reports",
        resource_type="raw",
        public_id=f"report-{reference}.pdf"
    )
    return {"public_url": result["secure_url"], "public_id": result["public_id"]}

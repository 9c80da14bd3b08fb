import os
from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache
from typing import Tuple
from dotenv import load_dotenv

ALGORITHM = "HS256"
SESSION_TTL = timedelta(days=7)

FALLBACK_ERROR_MESSAGE = "Internal server error"

ALLOWED_IMAGE_TYPES = ("image/jpg", "image/jpeg", "image/png")
MAX_IMAGES_COUNT = 20

# Entry dates and times are checked and normalized against this zone
ENTRY_TIMEZONE = "Asia/Kolkata"

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@dataclass(frozen=True)
class Settings:
    secret_key: str
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_upload_preset: str = ""
    renderer_url: str = "http://localhost:3000"
    renderer_token: str = ""
    request_timeout: float = 30.0
    assets_dir: str = os.path.join(BASE_DIR, "assets")
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


def load_settings() -> Settings:
    load_dotenv()

    secret_key = os.getenv("SECRET_KEY")
    if not secret_key:
        raise ValueError("SECRET_KEY is not set! Set it in environment variables.")

    origins = os.getenv("CORS_ORIGINS", "*")

    return Settings(
        secret_key=secret_key,
        cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
        cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
        cloudinary_upload_preset=os.getenv("CLOUDINARY_UPLOAD_PRESET_NAME", ""),
        renderer_url=os.getenv("PDF_RENDERER_URL", "http://localhost:3000"),
        renderer_token=os.getenv("PDF_RENDERER_TOKEN", ""),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        assets_dir=os.getenv("ASSETS_DIR", os.path.join(BASE_DIR, "assets")),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()

import logging
import time
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import FALLBACK_ERROR_MESSAGE, get_settings
from api.auth import router as auth_router
from api.clients import router as clients_router
from api.timesheet import router as timesheet_router
from api.upload import router as upload_router
from api.reports import router as reports_router

settings = get_settings()

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Timesheet Admin API")

# Innermost middleware: GZip and CORS also apply to the 500 fallback below
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        response = JSONResponse({"error": FALLBACK_ERROR_MESSAGE}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    message = error.get("msg", "Invalid request")
    if error.get("type") == "value_error":
        return message.removeprefix("Value error, ")
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {message}" if field else message

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Not found"
    return JSONResponse({"error": message}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": _validation_message(exc)}, status_code=status.HTTP_400_BAD_REQUEST)

@app.get("/")
async def root():
    return {"message": "Welcome to the Timesheet Admin API"}

app.include_router(auth_router)
app.include_router(clients_router)
app.include_router(timesheet_router)
app.include_router(upload_router)
app.include_router(reports_router)

def run():
    uvicorn.run(app, host=settings.host, port=settings.port)

if __name__ == "__main__":
    run()

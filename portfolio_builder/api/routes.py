from urllib.parse import urlparse

import httpx
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse, Response

from portfolio_builder.api.dependencies import (
    get_client_id,
    get_history_store,
    get_processor,
    get_settings,
)
from portfolio_builder.cache.history_store import HistoryStore
from portfolio_builder.config.settings import Settings
from portfolio_builder.logging.logger import Log
from portfolio_builder.processor.exceptions import ProcessorError
from portfolio_builder.processor.models import GenerationRequest
from portfolio_builder.processor.processor import Processor
from portfolio_builder.processor.prompt_builder import DEFAULT_TEMPLATE_ID

GENERIC_ERROR_MESSAGE = "An internal server error occurred."
PROXY_CACHE_CONTROL = "public, max-age=31536000, immutable"

router = APIRouter()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _internal_error(exc: Exception, settings: Settings) -> JSONResponse:
    message = str(exc) if settings.expose_internal_errors else ""
    return _error(message or GENERIC_ERROR_MESSAGE, 500)


def _read_upload(upload: UploadFile | None) -> tuple[bytes | None, str | None, str | None]:
    if upload is None:
        return None, None, None
    content = upload.file.read()
    if not content:
        return None, None, None
    return content, upload.filename, upload.content_type


def _fetch_html(url: str, settings: Settings) -> str | None:
    """Read the upstream body without following redirects; None if it exceeds the cap."""
    with httpx.stream(
        "GET", url, timeout=settings.proxy_timeout_seconds, follow_redirects=False
    ) as upstream:
        body = bytearray()
        for chunk in upstream.iter_bytes():
            body.extend(chunk)
            if len(body) > settings.proxy_max_bytes:
                return None
        return body.decode(upstream.encoding or "utf-8", errors="replace")


@router.post("/generate")
def generate(
    file: UploadFile | None = File(None),
    image: UploadFile | None = File(None),
    template: str = Form(DEFAULT_TEMPLATE_ID),
    recaptcha_token: str = Form("", alias="recaptchaToken"),
    processor: Processor = Depends(get_processor),
    settings: Settings = Depends(get_settings),
    client_id: str = Depends(get_client_id),
):
    """Turn an uploaded resume PDF into a hosted portfolio page."""
    pdf_bytes, file_name, _ = _read_upload(file)
    image_bytes, image_name, image_type = _read_upload(image)
    request = GenerationRequest(
        pdf_bytes=pdf_bytes,
        file_name=file_name or "resume.pdf",
        template_id=template or DEFAULT_TEMPLATE_ID,
        captcha_token=recaptcha_token,
        client_id=client_id,
        profile_image_bytes=image_bytes,
        image_file_name=image_name,
        image_content_type=image_type,
    )
    try:
        artifact = processor.process(request)
    except ProcessorError as exc:
        Log.warning(f"/generate rejected for {client_id}: {exc}")
        return _error(str(exc), exc.status_code)
    except Exception as exc:
        Log.exception(f"Error in /generate: {exc}")
        return _internal_error(exc, settings)
    return {"url": artifact.html_url}


@router.get("/history")
def history(
    history_store: HistoryStore = Depends(get_history_store),
    settings: Settings = Depends(get_settings),
    client_id: str = Depends(get_client_id),
):
    """Recent portfolios generated from the caller's address."""
    try:
        records = history_store.get_history(client_id)
    except Exception as exc:
        Log.exception(f"Error fetching history: {exc}")
        return _internal_error(exc, settings)
    return {"history": records}


@router.get("/proxy")
def proxy(
    url: str | None = None,
    settings: Settings = Depends(get_settings),
):
    """Re-serve a generated page as text/html so it can be framed."""
    if not url:
        return _error("URL parameter is required", 400)
    if urlparse(url).scheme not in ("http", "https"):
        return _error("URL must use http or https", 400)
    try:
        html = _fetch_html(url, settings)
    except httpx.HTTPError as exc:
        Log.error(f"Error proxying HTML from {url}: {exc}")
        return _error("Failed to fetch HTML", 500)
    if html is None:
        Log.error(f"Refused to proxy {url}: body exceeds {settings.proxy_max_bytes} bytes")
        return _error("Failed to fetch HTML", 500)
    return Response(
        content=html,
        media_type="text/html; charset=utf-8",
        headers={"Cache-Control": PROXY_CACHE_CONTROL},
    )


@router.get("/health/live")
def health_live():
    return {"status": "ok"}

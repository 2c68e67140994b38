from __future__ import annotations

import logging
import os
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Body, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, Response

from code_beautifier.env import max_text_chars, max_upload_bytes
from code_beautifier.formatting.config import StyleConfig
from code_beautifier.formatting.dispatcher import format_code
from code_beautifier.formatting.errors import FormatError
from code_beautifier.languages import (
    FILE_EXTENSIONS,
    LANGUAGE_LABELS,
    download_filename,
    language_from_filename,
    parse_language,
)
from code_beautifier.logging_setup import ensure_file_logging
from code_beautifier.models import (
    DownloadRequest,
    ErrorEnvelope,
    FileReadResponse,
    FormatRequest,
    FormatResponse,
    LanguageListResponse,
    LanguageOut,
    StyleOptions,
    StyleSettingsPutRequest,
    StyleSettingsResponse,
)
from code_beautifier.settings_store import (
    StyleDefaults,
    dotenv_path,
    read_style_defaults,
    style_config_from_defaults,
    style_env_updates_from_patch,
    update_style_defaults,
)

logger = logging.getLogger(__name__)

WORKDIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = WORKDIR / "templates"
LOG_DIR = WORKDIR / "logs"

_filename_strip_re = re.compile(r"[^0-9A-Za-z._ -]+")
_lone_surrogate_re = re.compile(r"[\ud800-\udfff]")


def _encodable(text: str) -> str:
    # JSON request bodies may carry unpaired surrogates; UTF-8 responses cannot.
    return _lone_surrogate_re.sub("\ufffd", text)


def _safe_filename(name: str) -> str:
    base = os.path.basename(name or "")
    base = base.replace("\\", "_").replace("/", "_").strip()
    if not base:
        return "input.txt"
    base = _filename_strip_re.sub("_", base)
    return base[:200]


def _decode_text(data: bytes) -> str:
    for enc in ("utf-8-sig", "utf-8", "gb18030", "gbk"):
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def _error_code_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code == 413:
        return "too_large"
    if status_code == 422:
        return "format_failed"
    if status_code == 400:
        return "bad_request"
    return "internal_error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": ErrorEnvelope(code=_error_code_for_status(status_code), message=message).model_dump()},
    )


async def _read_upload_limited(upload: UploadFile, limit: int) -> bytes:
    total = 0
    parts: list[bytes] = []
    while True:
        chunk = await upload.read(1024 * 1024)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise HTTPException(status_code=413, detail=f"file too large (> {limit} bytes)")
        parts.append(chunk)
    return b"".join(parts)


def _style_from_options(opts: StyleOptions) -> StyleConfig:
    return StyleConfig(
        tab_width=int(opts.tab_width),
        use_tabs=bool(opts.use_tabs),
        semicolons=bool(opts.semicolons),
        single_quote=bool(opts.single_quote),
        trailing_comma=str(opts.trailing_comma),
        print_width=int(opts.print_width),
        auto_format=bool(opts.auto_format),
    )


def _options_from_style(style: StyleConfig) -> StyleOptions:
    return StyleOptions(
        tab_width=style.tab_width,
        use_tabs=style.use_tabs,
        semicolons=style.semicolons,
        single_quote=style.single_quote,
        trailing_comma=style.trailing_comma,
        print_width=style.print_width,
        auto_format=style.auto_format,
    )


def _persisted_style() -> StyleConfig:
    path = dotenv_path(workdir=WORKDIR)
    try:
        return style_config_from_defaults(read_style_defaults(path))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # LOG_DIR is monkeypatched in tests; use the current value at startup time.
    log_file = ensure_file_logging(log_dir=LOG_DIR)
    logger.info("file logging enabled: %s", log_file)
    yield


app = FastAPI(lifespan=_lifespan)


@app.exception_handler(HTTPException)
async def _http_exception_handler(_request: Request, exc: HTTPException):
    return _error(int(exc.status_code), str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(_request: Request, exc: RequestValidationError):
    msg = "bad request"
    errors = exc.errors()
    if errors:
        msg = errors[0].get("msg") or msg
    return _error(400, msg)


@app.exception_handler(FormatError)
async def _format_error_handler(_request: Request, exc: FormatError):
    return _error(422, exc.message)


@app.exception_handler(Exception)
async def _unhandled_exception_handler(_request: Request, exc: Exception):
    logger.exception("unhandled error")
    return _error(500, str(exc))


@app.get("/", include_in_schema=False)
async def index():
    path = TEMPLATES_DIR / "index.html"
    if not path.exists():
        raise HTTPException(status_code=500, detail="missing templates/index.html")
    return FileResponse(path, media_type="text/html; charset=utf-8")


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.get("/api/v1/languages", response_model=LanguageListResponse)
async def list_languages():
    return LanguageListResponse(
        languages=[
            LanguageOut(id=str(lang), label=label, extension=FILE_EXTENSIONS[lang])
            for lang, label in LANGUAGE_LABELS.items()
        ]
    )


@app.get("/api/v1/settings/style", response_model=StyleSettingsResponse)
async def get_style_settings():
    return StyleSettingsResponse(style=_options_from_style(_persisted_style()))


@app.put("/api/v1/settings/style", response_model=StyleSettingsResponse)
async def put_style_settings(body: StyleSettingsPutRequest = Body(...)):
    path = dotenv_path(workdir=WORKDIR)
    patch = StyleDefaults(**body.style.model_dump())
    updates = style_env_updates_from_patch(patch, fields_set=set(body.style.model_fields_set))
    try:
        if updates:
            update_style_defaults(path, updates=updates)
        defaults = read_style_defaults(path)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    logger.info("style settings updated: %s", sorted(updates))
    return StyleSettingsResponse(style=_options_from_style(style_config_from_defaults(defaults)))


@app.post("/api/v1/format", response_model=FormatResponse)
async def format_text(body: FormatRequest = Body(...)):
    limit = max_text_chars()
    if len(body.text) > limit:
        raise HTTPException(status_code=413, detail=f"text too large (> {limit} chars)")

    style = _style_from_options(body.style) if body.style is not None else _persisted_style()
    out = await run_in_threadpool(format_code, body.text, body.language, style)

    lang = parse_language(body.language)
    return FormatResponse(
        text=_encodable(out),
        language=str(lang) if lang is not None else _encodable(body.language),
        changed=out != body.text,
    )


@app.post("/api/v1/download")
async def download_text(body: DownloadRequest = Body(...)):
    filename = download_filename(body.language)
    return Response(
        content=_encodable(body.text).encode("utf-8"),
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/api/v1/files/read", response_model=FileReadResponse)
async def read_file(file: UploadFile = File(...)):
    data = await _read_upload_limited(file, max_upload_bytes())
    filename = _safe_filename(file.filename or "")
    lang = language_from_filename(filename)
    return FileReadResponse(
        filename=filename,
        text=_decode_text(data),
        language=str(lang) if lang is not None else None,
    )

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from copytxmate.clipboard.backend import ClipboardError, PyperclipBackend
from copytxmate.clipboard.watcher import ClipboardState, ClipboardWatcher
from copytxmate.config import WatcherConfig
from copytxmate.env import env_truthy
from copytxmate.formatting.formatter import format_text_with_stats
from copytxmate.formatting.samples import run_samples
from copytxmate.logging_setup import ensure_file_logging
from copytxmate.models import (
    ActionResponse,
    ClipboardStateOut,
    ClipboardStateResponse,
    CopyRequest,
    ErrorEnvelope,
    FormatRequest,
    FormatResponse,
    SampleOut,
    SamplesResponse,
    Settings,
    SettingsPutRequest,
    SettingsResponse,
)
from copytxmate.preferences import (
    Preferences,
    preference_updates_from_patch,
    preferences_path,
    read_preferences,
    update_preferences,
)

logger = logging.getLogger(__name__)

WORKDIR = Path(__file__).resolve().parent.parent
LOG_DIR = WORKDIR / "logs"

WATCHER = ClipboardWatcher(PyperclipBackend(), config=WatcherConfig.from_env())


def _error_code_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code == 409:
        return "conflict"
    if status_code == 503:
        return "clipboard_unavailable"
    if status_code in {400, 413, 422}:
        return "bad_request"
    return "internal_error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": ErrorEnvelope(code=_error_code_for_status(status_code), message=message).model_dump()},
    )


def _state_to_out(st: ClipboardState) -> ClipboardStateOut:
    return ClipboardStateOut(
        current_text=st.current_text,
        formatted_text=st.formatted_text,
        auto_format=st.auto_format,
        revision=st.revision,
        watching=WATCHER.is_running,
    )


def _settings_path() -> Path:
    return preferences_path(workdir=WORKDIR)


def _apply_preferences(prefs: Preferences) -> None:
    if prefs.auto_format is not None:
        WATCHER.set_auto_format(prefs.auto_format)


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    log_file = ensure_file_logging(log_dir=LOG_DIR)
    logger.info("file logging enabled: %s", log_file)

    try:
        _apply_preferences(read_preferences(_settings_path()))
    except ValueError as e:
        logger.warning("ignoring invalid preferences: %s", e)

    if env_truthy("COPYTXMATE_DISABLE_WATCHER"):
        logger.info("clipboard watcher disabled by COPYTXMATE_DISABLE_WATCHER")
    else:
        WATCHER.start()

    yield

    WATCHER.stop()


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


@app.exception_handler(Exception)
async def _unhandled_exception_handler(_request: Request, exc: Exception):
    logger.exception("unhandled error")
    return _error(500, str(exc))


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.post("/api/v1/format", response_model=FormatResponse)
async def format_endpoint(body: FormatRequest = Body(...)):
    result = format_text_with_stats(body.text)
    return FormatResponse(text=result.text, stats=result.stats)


@app.get("/api/v1/samples", response_model=SamplesResponse)
async def samples():
    return SamplesResponse(samples=[SampleOut(input=src, output=out) for src, out in run_samples()])


@app.get("/api/v1/clipboard", response_model=ClipboardStateResponse)
async def get_clipboard():
    return ClipboardStateResponse(clipboard=_state_to_out(WATCHER.snapshot()))


@app.post("/api/v1/clipboard/format", response_model=ActionResponse)
async def format_clipboard():
    st = WATCHER.format_current()
    return ActionResponse(ok=True, clipboard=_state_to_out(st))


@app.post("/api/v1/clipboard/copy", response_model=ActionResponse)
async def copy_clipboard(body: CopyRequest = Body(default_factory=CopyRequest)):
    st = WATCHER.snapshot()
    if st.auto_format:
        raise HTTPException(status_code=409, detail="auto format is on; the clipboard already holds formatted text")

    text = st.formatted_text if body.text is None else body.text
    if not text:
        raise HTTPException(status_code=400, detail="nothing to copy")

    try:
        WATCHER.copy_to_clipboard(text)
    except ClipboardError as e:
        raise HTTPException(status_code=503, detail=f"clipboard unavailable: {e}") from e

    return ActionResponse(ok=True, clipboard=_state_to_out(WATCHER.snapshot()))


@app.get("/api/v1/settings", response_model=SettingsResponse)
async def get_settings():
    try:
        prefs = read_preferences(_settings_path())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    auto_format = prefs.auto_format
    if auto_format is None:
        auto_format = WATCHER.snapshot().auto_format
    return SettingsResponse(settings=Settings(auto_format=auto_format))


@app.put("/api/v1/settings", response_model=SettingsResponse)
async def put_settings(body: SettingsPutRequest = Body(...)):
    path = _settings_path()
    patch = Preferences(**body.settings.model_dump())
    updates = preference_updates_from_patch(patch, fields_set=set(body.settings.model_fields_set))
    try:
        if updates:
            update_preferences(path, updates=updates)
        prefs = read_preferences(path)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    _apply_preferences(prefs)
    return SettingsResponse(settings=Settings(auto_format=WATCHER.snapshot().auto_format))

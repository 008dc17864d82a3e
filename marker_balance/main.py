import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile

from .balance import build_marker_set, check_pairs
from .config import Settings, configure_logging, get_settings
from .decode import decode_text
from .models import BalanceRequest, BalanceResponse, FileBalanceResponse, HealthResponse
from .validation import ArgumentError, must_not_be_empty_or_whitespace

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings())
    yield


app = FastAPI(
    title="marker-balance",
    description="Checks that opening and closing markers in a text are balanced and nested",
    version="0.1.0",
    lifespan=lifespan,
)


def _run(source, opening, closing, settings: Settings) -> BalanceResponse:
    if opening is None and closing is None:
        opening, closing = list(settings.default_opening), list(settings.default_closing)

    try:
        must_not_be_empty_or_whitespace("source", source)
        pairs = build_marker_set(opening, closing)
        verdict = check_pairs(source, pairs)
    except ArgumentError as e:
        logger.info("rejected balance request: %s", e)
        raise HTTPException(status_code=422, detail=str(e))

    return BalanceResponse(balanced=verdict.balanced, position=verdict.position, pairs=len(pairs))


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/balance", response_model=BalanceResponse)
def balance(req: BalanceRequest, settings: Settings = Depends(get_settings)):
    return _run(req.source, req.opening, req.closing, settings)


@app.post("/balance/file", response_model=FileBalanceResponse)
async def balance_file(
    file: UploadFile = File(...),
    opening: Optional[List[str]] = Form(None),
    closing: Optional[List[str]] = Form(None),
    settings: Settings = Depends(get_settings),
):
    # limit + 1 bytes is enough to tell an oversized upload
    raw = await file.read(settings.max_upload_bytes + 1)
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Upload exceeds {settings.max_upload_bytes} bytes",
        )

    text, enc = decode_text(raw)
    result = _run(text, opening, closing, settings)
    return FileBalanceResponse(**result.model_dump(), encoding=enc)
